"""Cell value coercion — typed table scalars to spreadsheet values."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from numbers import Integral, Real
from typing import Any

from facility_report.errors import ConversionError
from facility_report.models import ColumnKind


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ConversionError(f"boolean {value!r} is not an integer value")
    if isinstance(value, Integral):
        return int(value)
    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return int(value)
        raise ConversionError(f"{value!r} is not an integral number")
    if isinstance(value, Real):
        try:
            if float(value).is_integer():
                return int(value)
        except (OverflowError, ValueError):
            pass
        raise ConversionError(f"{value!r} is not an integral number")
    if isinstance(value, str):
        token = value.strip()
        try:
            parsed = Decimal(token)
        except InvalidOperation:
            raise ConversionError(f"cannot interpret {value!r} as an integer") from None
        if not parsed.is_finite() or parsed != parsed.to_integral_value():
            raise ConversionError(f"cannot interpret {value!r} as an integer")
        return int(parsed)
    raise ConversionError(
        f"cannot interpret {type(value).__name__} value {value!r} as an integer"
    )


def coerce_cell(value: Any, kind: ColumnKind) -> Any:
    """Return the spreadsheet representation of *value* for a *kind* column."""
    if value is None:
        raise ConversionError("absent values have no cell representation")
    if kind is ColumnKind.TEXT:
        if not isinstance(value, str):
            raise ConversionError(
                f"expected text, got {type(value).__name__} value {value!r}"
            )
        return value
    if kind is ColumnKind.INTEGER:
        return _to_int(value)
    return str(value)
