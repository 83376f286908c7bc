from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.constants import ZERO
from ..core.exceptions import ValidationError


def to_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """Best-effort numeric coercion; missing, non-numeric or non-finite values give ``default``."""

    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, (float, str)):
        text = str(value).strip()
        if not text:
            return default
        try:
            result = Decimal(text)
        except InvalidOperation:
            return default
    else:
        return default

    if not result.is_finite():
        return default
    return result


def to_non_negative_decimal(value: Any) -> Decimal:
    return max(to_decimal(value), ZERO)


def coerce_minutes(value: Any) -> Decimal:
    """Minute deduction: negative, missing or non-numeric values count as 0."""
    return to_non_negative_decimal(value)


def require_non_negative(value: Any, field_name: str) -> Decimal:
    number = to_decimal(value, default=Decimal(-1))
    if number < ZERO:
        raise ValidationError(f"{field_name} must be a non-negative number, got {value!r}")
    return number
