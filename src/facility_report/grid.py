"""Grid writer — compose a titled, styled sheet grid from a table."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from facility_report.cells import coerce_cell
from facility_report.models import CategoryEntry, Column, Table

# ── Styles ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class CellStyle:
    fill_color: str | None = None
    bottom_border: str | None = None


HEADER_STYLE = CellStyle(fill_color="808080", bottom_border="thick")
FAILURE_STYLE = CellStyle(fill_color="FF0000")

CATEGORIES_LABEL = "Matching categories:"

_WIDTH_PADDING = 2
MAX_COLUMN_WIDTH = 255


# ── Grid ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GridCell:
    value: Any
    style: CellStyle | None = None


@dataclass
class Grid:
    """Sparse 0-based ``(row, column)`` cell container."""

    cells: dict[tuple[int, int], GridCell] = field(default_factory=dict)
    column_widths: dict[int, int] = field(default_factory=dict)

    def write(self, row: int, column: int, value: Any, style: CellStyle | None = None) -> None:
        if row < 0 or column < 0:
            raise IndexError(f"negative cell coordinate ({row}, {column})")
        if (row, column) in self.cells:
            raise ValueError(f"cell ({row}, {column}) is already occupied")
        self.cells[(row, column)] = GridCell(value, style)

    def is_occupied(self, row: int, column: int) -> bool:
        return (row, column) in self.cells

    def value(self, row: int, column: int) -> Any:
        cell = self.cells.get((row, column))
        return None if cell is None else cell.value

    def style(self, row: int, column: int) -> CellStyle | None:
        cell = self.cells.get((row, column))
        return None if cell is None else cell.style

    def row_cells(self, row: int) -> dict[int, Any]:
        """Return ``{column: value}`` for the occupied cells of *row*."""
        return {c: cell.value for (r, c), cell in sorted(self.cells.items()) if r == row}

    @property
    def row_count(self) -> int:
        return max((r for r, _ in self.cells), default=-1) + 1

    @property
    def column_count(self) -> int:
        return max((c for _, c in self.cells), default=-1) + 1

    def autosize(self, max_width: int = MAX_COLUMN_WIDTH) -> None:
        """Size every column from 0 to the last used one to fit its text."""
        longest = dict.fromkeys(range(self.column_count), 0)
        for (_, c), cell in self.cells.items():
            text = "" if cell.value is None else str(cell.value)
            line = max((len(part) for part in text.splitlines()), default=0)
            longest[c] = max(longest[c], line)
        self.column_widths = {
            c: min(width + _WIDTH_PADDING, max_width) for c, width in longest.items()
        }


# ── Composition ──────────────────────────────────────────────────

FailurePredicate = Callable[[tuple[Any, ...], Column], bool]


def compose_grid(
    title: str,
    metadata: Sequence[tuple[str, Any]],
    table: Table,
    *,
    header_style: CellStyle = HEADER_STYLE,
    categories: Sequence[CategoryEntry] | None = None,
    failure_style: CellStyle | None = None,
    is_failure: FailurePredicate | None = None,
) -> Grid:
    """Render title, metadata, optional categories and *table* into a grid.

    ``categories=None`` omits the matching-categories section; an empty
    sequence still writes its label row. *failure_style* is only applied to
    cells for which *is_failure* returns true.
    """
    grid = Grid()
    grid.write(0, 0, title)

    row = 2
    for label, value in metadata:
        grid.write(row, 0, label)
        if value is not None:
            grid.write(row, 1, value)
        row += 1
    if metadata:
        row += 1

    if categories is not None:
        grid.write(row, 0, CATEGORIES_LABEL)
        row += 1
        for cat in categories:
            for c_idx, text in enumerate((cat.classification, cat.code, cat.description)):
                if text is not None:
                    grid.write(row, c_idx, text)
            row += 1
        row += 1

    indexed = [(i, col) for i, col in enumerate(table.columns) if not col.auto_increment]
    for c_idx, (_, col) in enumerate(indexed):
        grid.write(row, c_idx, col.caption, header_style)
    row += 1

    for values in table.rows:
        for c_idx, (v_idx, col) in enumerate(indexed):
            value = values[v_idx]
            if value is None:
                continue
            style = None
            if failure_style is not None and is_failure is not None and is_failure(values, col):
                style = failure_style
            grid.write(row, c_idx, coerce_cell(value, col.kind), style)
        row += 1

    grid.autosize()
    return grid
