"""Exception taxonomy for report rendering."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for failures raised while building a report."""


class ConversionError(ReportError, ValueError):
    """A table value does not match its column's declared kind."""


class SheetBuildError(ReportError):
    """A composed grid could not be materialised into a worksheet."""
