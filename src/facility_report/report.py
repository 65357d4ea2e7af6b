"""Excel validation report writer — summary sheet plus one sheet per requirement group."""

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, BinaryIO

from facility_report import DEFAULT_PREFERRED_CLASSIFICATION, SUMMARY_SHEET_NAME
from facility_report.grid import (
    FAILURE_STYLE,
    HEADER_STYLE,
    CellStyle,
    FailurePredicate,
    compose_grid,
)
from facility_report.models import CategoryEntry, Facility, RequirementGroup, Table
from facility_report.naming import SheetNamer
from facility_report.summary import build_summary_table
from facility_report.workbook import SpreadsheetFormat, SpreadsheetWorkbook, new_workbook

logger = logging.getLogger(__name__)

SUMMARY_TITLE = "Validation Report Summary"
DETAIL_TITLE = "Asset type requirement report"

SummaryBuilder = Callable[[Facility, str], Table]
DetailBuilder = Callable[[RequirementGroup], Table]

Destination = str | os.PathLike[str] | BinaryIO


def _group_attributes(group: RequirementGroup) -> Table:
    return group.attributes


def render_sheet(
    workbook: SpreadsheetWorkbook,
    sheet_name: str,
    title: str,
    metadata: Sequence[tuple[str, Any]],
    build_table: Callable[[], Table],
    *,
    header_style: CellStyle = HEADER_STYLE,
    categories: Sequence[CategoryEntry] | None = None,
    failure_style: CellStyle | None = None,
    is_failure: FailurePredicate | None = None,
) -> bool:
    """Add *sheet_name* to *workbook* and render it; return ``False`` on any failure."""
    try:
        ws = workbook.add_sheet(sheet_name)
        grid = compose_grid(
            title,
            metadata,
            build_table(),
            header_style=header_style,
            categories=categories,
            failure_style=failure_style,
            is_failure=is_failure,
        )
        workbook.render(ws, grid)
    except Exception:
        logger.exception("Failed to create sheet %r", sheet_name)
        return False
    logger.debug("Rendered sheet %r", sheet_name)
    return True


class ValidationReport:
    """Creates a workbook report of provided and missing facility information.

    Use :meth:`create` to produce the report. Errors never propagate out of
    ``create``; they are logged and reported as ``False``.

    Table cells for which *is_failure* returns true are drawn with
    *failure_style* on every sheet.
    """

    def __init__(
        self,
        preferred_classification: str = DEFAULT_PREFERRED_CLASSIFICATION,
        *,
        summary_builder: SummaryBuilder = build_summary_table,
        detail_builder: DetailBuilder = _group_attributes,
        header_style: CellStyle = HEADER_STYLE,
        failure_style: CellStyle = FAILURE_STYLE,
        is_failure: FailurePredicate | None = None,
    ) -> None:
        self.preferred_classification = preferred_classification
        self.summary_builder = summary_builder
        self.detail_builder = detail_builder
        self.header_style = header_style
        self.failure_style = failure_style
        self.is_failure = is_failure

    def create(
        self,
        facility: Facility,
        destination: Destination,
        fmt: SpreadsheetFormat | str = SpreadsheetFormat.XLSX,
    ) -> bool:
        """Write the report for *facility* to a file path or writable binary stream.

        For a path the extension is replaced to match *fmt*.
        """
        if facility is None:
            raise TypeError("facility must not be None")
        fmt = SpreadsheetFormat.parse(fmt)
        if isinstance(destination, (str, os.PathLike)):
            return self._create_file(facility, Path(destination), fmt)
        return self._create_stream(facility, destination, fmt, label=_stream_label(destination))

    # ── Internals ────────────────────────────────────────────────

    def _create_file(self, facility: Facility, path: Path, fmt: SpreadsheetFormat) -> bool:
        try:
            report_path = path.with_suffix(fmt.extension)
        except ValueError as exc:
            logger.error("Failed to save %s, %s", path, exc)
            return False
        tmp_path = report_path.with_name(f"{report_path.stem}.tmp{fmt.extension}")
        try:
            with open(tmp_path, "wb") as stream:
                ok = self._create_stream(facility, stream, fmt, label=str(report_path))
            if ok:
                tmp_path.replace(report_path)
                logger.info("Saved %s", report_path)
            return ok
        except OSError as exc:
            logger.error("Failed to save %s, %s", report_path, exc)
            return False
        finally:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)

    def _create_stream(
        self, facility: Facility, stream: BinaryIO, fmt: SpreadsheetFormat, *, label: str
    ) -> bool:
        try:
            workbook = new_workbook(fmt)
        except Exception as exc:
            logger.error("Failed to initialise %s workbook for %s: %s", fmt.value, label, exc)
            return False

        try:
            if not self._write_sheets(workbook, facility, label):
                return False
        except Exception:
            logger.exception("Failed to create %s: facility data could not be read", label)
            return False

        try:
            workbook.save(stream)
        except Exception as exc:
            logger.error("Failed to stream excel report to %s: %s", label, exc)
            return False
        return True

    def _write_sheets(self, workbook: SpreadsheetWorkbook, facility: Facility, label: str) -> bool:
        """Render the summary sheet, then one sheet per requirement group, in order."""
        if not render_sheet(
            workbook,
            SUMMARY_SHEET_NAME,
            SUMMARY_TITLE,
            [
                ("Facility:", facility.name or None),
                ("Preferred classification:", self.preferred_classification or None),
            ],
            lambda: self.summary_builder(facility, self.preferred_classification),
            header_style=self.header_style,
            failure_style=self.failure_style,
            is_failure=self.is_failure,
        ):
            logger.error("Failed to create %s: summary sheet could not be rendered", label)
            return False

        namer = SheetNamer(reserved=(SUMMARY_SHEET_NAME,))
        for group in facility.requirement_groups:
            sheet_name = namer.next_name(group.name)
            if not render_sheet(
                workbook,
                sheet_name,
                DETAIL_TITLE,
                [
                    ("Name:", group.name),
                    ("External system:", group.external_system),
                    ("External id:", group.external_id),
                ],
                lambda g=group: self.detail_builder(g),
                header_style=self.header_style,
                categories=group.categories,
                failure_style=self.failure_style,
                is_failure=self.is_failure,
            ):
                logger.error("Failed to create %s: sheet %r could not be rendered", label, sheet_name)
                return False
        return True


def _stream_label(stream: Any) -> str:
    name = getattr(stream, "name", None)
    return str(name) if isinstance(name, (str, os.PathLike)) else f"<{type(stream).__name__}>"


def create_report(
    facility: Facility,
    destination: Destination,
    fmt: SpreadsheetFormat | str = SpreadsheetFormat.XLSX,
    *,
    preferred_classification: str = DEFAULT_PREFERRED_CLASSIFICATION,
) -> bool:
    """Shortcut for ``ValidationReport(preferred_classification).create(...)``."""
    return ValidationReport(preferred_classification).create(facility, destination, fmt)
