from __future__ import annotations

from facility_report.errors import ConversionError, ReportError, SheetBuildError


def test_error_taxonomy() -> None:
    assert issubclass(ConversionError, ReportError)
    assert issubclass(ConversionError, ValueError)
    assert issubclass(SheetBuildError, ReportError)
    assert not issubclass(SheetBuildError, ValueError)
