"""Sheet naming — safe, unique worksheet titles."""

from __future__ import annotations

import re
from collections.abc import Iterable

from facility_report import SUMMARY_SHEET_NAME

MAX_SHEET_NAME_LENGTH = 31
_FORBIDDEN_CHARS_RE = re.compile(r"[:\\/?*\[\]\x00-\x1f]")


def safe_sheet_name(name: str | None, replacement: str = " ") -> str:
    """Return *name* with forbidden characters replaced and length capped.

    Spreadsheet applications reject ``: \\ / ? * [ ]`` and control characters
    anywhere in a sheet name, and an apostrophe at either end.
    """
    if not name:
        return "empty"
    cleaned = _FORBIDDEN_CHARS_RE.sub(replacement, name)
    if cleaned.startswith("'"):
        cleaned = replacement + cleaned[1:]
    cleaned = cleaned[:MAX_SHEET_NAME_LENGTH]
    if cleaned.endswith("'"):
        cleaned = cleaned[:-1] + replacement
    return cleaned


class SheetNamer:
    """Hands out ``"{counter} {label}"`` names, unique within one workbook."""

    def __init__(self, reserved: Iterable[str] = (SUMMARY_SHEET_NAME,), start: int = 1) -> None:
        self.counter = start
        self._used: set[str] = {name.casefold() for name in reserved}

    def next_name(self, label: str | None) -> str:
        base = safe_sheet_name(f"{self.counter} {label or ''}")
        self.counter += 1
        return self._claim(base)

    def _claim(self, base: str) -> str:
        candidate = base
        suffix = 1
        while candidate.casefold() in self._used:
            suffix += 1
            suffix_str = f" ({suffix})"
            candidate = f"{base[: MAX_SHEET_NAME_LENGTH - len(suffix_str)]}{suffix_str}"
        self._used.add(candidate.casefold())
        return candidate
