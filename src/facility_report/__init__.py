"""facility-report — Render facility validation results into spreadsheet workbooks."""

__version__ = "0.1.0"

SUMMARY_SHEET_NAME = "Summary"
DEFAULT_PREFERRED_CLASSIFICATION = "Uniclass2015"
