"""Workbook backends — materialise grids with openpyxl (xlsx) or xlwt (xls)."""

from __future__ import annotations

from enum import Enum
from typing import Any, BinaryIO

import xlwt
from openpyxl import Workbook
from openpyxl.styles import Border, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from facility_report.errors import SheetBuildError
from facility_report.grid import CellStyle, Grid


class SpreadsheetFormat(str, Enum):
    XLS = "xls"
    XLSX = "xlsx"

    @classmethod
    def parse(cls, value: SpreadsheetFormat | str) -> SpreadsheetFormat:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lstrip(".").lower())
        except ValueError:
            raise ValueError(f"Unsupported spreadsheet format: {value!r}. Use xls or xlsx") from None

    @property
    def extension(self) -> str:
        return f".{self.value}"


def _check_limits(grid: Grid, max_rows: int, max_cols: int, label: str) -> None:
    if grid.row_count > max_rows:
        raise SheetBuildError(f"{grid.row_count} rows exceed the {label} limit of {max_rows}")
    if grid.column_count > max_cols:
        raise SheetBuildError(
            f"{grid.column_count} columns exceed the {label} limit of {max_cols}"
        )


# ── xlsx (openpyxl) ──────────────────────────────────────────────


class XlsxWorkbook:
    """Zip-xml workbook backed by openpyxl."""

    format = SpreadsheetFormat.XLSX
    max_rows = 1_048_576
    max_cols = 16_384

    def __init__(self) -> None:
        self._wb = Workbook()
        active_sheet = self._wb.active
        if active_sheet is not None:
            self._wb.remove(active_sheet)  # remove default sheet

    @property
    def sheet_names(self) -> list[str]:
        return list(self._wb.sheetnames)

    def add_sheet(self, name: str) -> Worksheet:
        return self._wb.create_sheet(title=name)

    def render(self, ws: Worksheet, grid: Grid) -> None:
        _check_limits(grid, self.max_rows, self.max_cols, "xlsx")
        for (r_idx, c_idx), cell in sorted(grid.cells.items()):
            target = ws.cell(row=r_idx + 1, column=c_idx + 1, value=cell.value)
            if target.data_type == "f":
                # text starting with "=" stays text; formulas are not supported
                target.data_type = "s"
            if cell.style is not None:
                _apply_xlsx_style(target, cell.style)
        for c_idx, width in grid.column_widths.items():
            ws.column_dimensions[get_column_letter(c_idx + 1)].width = width

    def save(self, stream: BinaryIO) -> None:
        self._wb.save(stream)


def _apply_xlsx_style(target: Any, style: CellStyle) -> None:
    if style.fill_color:
        target.fill = PatternFill(
            start_color=style.fill_color, end_color=style.fill_color, fill_type="solid"
        )
    if style.bottom_border:
        target.border = Border(bottom=Side(style=style.bottom_border))


# ── xls (xlwt) ───────────────────────────────────────────────────

_XLS_BORDERS: dict[str, int] = {
    "thin": xlwt.Borders.THIN,
    "medium": xlwt.Borders.MEDIUM,
    "thick": xlwt.Borders.THICK,
}
_XLS_PALETTE: dict[str, str] = {
    "000000": "black",
    "FFFFFF": "white",
    "FF0000": "red",
    "00FF00": "bright_green",
    "0000FF": "blue",
    "FFFF00": "yellow",
    "C0C0C0": "gray25",
    "808080": "gray50",
}
_XLS_CUSTOM_COLOURS = range(0x21, 0x40)
_XLS_MAX_WIDTH_UNITS = 65_535


class XlsWorkbook:
    """Legacy binary (BIFF8) workbook backed by xlwt."""

    format = SpreadsheetFormat.XLS
    max_rows = 65_536
    max_cols = 256

    def __init__(self) -> None:
        self._wb = xlwt.Workbook(encoding="utf-8")
        self._names: list[str] = []
        self._styles: dict[CellStyle, xlwt.XFStyle] = {}
        self._colours: dict[str, int] = {}

    @property
    def sheet_names(self) -> list[str]:
        return list(self._names)

    def add_sheet(self, name: str) -> Any:
        ws = self._wb.add_sheet(name)
        self._names.append(name)
        return ws

    def render(self, ws: Any, grid: Grid) -> None:
        _check_limits(grid, self.max_rows, self.max_cols, "xls")
        for (r_idx, c_idx), cell in sorted(grid.cells.items()):
            ws.write(r_idx, c_idx, cell.value, self._xf(cell.style))
        for c_idx, width in grid.column_widths.items():
            ws.col(c_idx).width = min(width * 256, _XLS_MAX_WIDTH_UNITS)

    def save(self, stream: BinaryIO) -> None:
        self._wb.save(stream)

    def _xf(self, style: CellStyle | None) -> xlwt.XFStyle:
        if style is None:
            return xlwt.Style.default_style
        cached = self._styles.get(style)
        if cached is not None:
            return cached

        xf = xlwt.XFStyle()
        if style.fill_color:
            pattern = xlwt.Pattern()
            pattern.pattern = xlwt.Pattern.SOLID_PATTERN
            pattern.pattern_fore_colour = self._colour_index(style.fill_color)
            xf.pattern = pattern
        if style.bottom_border:
            borders = xlwt.Borders()
            try:
                borders.bottom = _XLS_BORDERS[style.bottom_border]
            except KeyError:
                raise SheetBuildError(f"Unsupported border style: {style.bottom_border!r}") from None
            xf.borders = borders
        self._styles[style] = xf
        return xf

    def _colour_index(self, color: str) -> int:
        key = color.upper().lstrip("#")[-6:]
        named = _XLS_PALETTE.get(key)
        if named is not None:
            return xlwt.Style.colour_map[named]
        if key in self._colours:
            return self._colours[key]
        if len(self._colours) >= len(_XLS_CUSTOM_COLOURS):
            raise SheetBuildError("xls colour palette is exhausted")
        try:
            red, green, blue = (int(key[i : i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            raise SheetBuildError(f"Invalid fill colour: {color!r}") from None
        index = _XLS_CUSTOM_COLOURS[len(self._colours)]
        self._wb.set_colour_RGB(index, red, green, blue)
        self._colours[key] = index
        return index


SpreadsheetWorkbook = XlsxWorkbook | XlsWorkbook


def new_workbook(fmt: SpreadsheetFormat | str) -> SpreadsheetWorkbook:
    """Return an empty workbook in the requested encoding."""
    if SpreadsheetFormat.parse(fmt) is SpreadsheetFormat.XLSX:
        return XlsxWorkbook()
    return XlsWorkbook()
