"""Display helpers for report rows (hours as H:MM, money as $0.00)."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ..core.constants import MINUTES_PER_HOUR
from .validators import to_decimal

CENT = Decimal("0.01")


def format_hour_minute(hours: Any) -> str:
    """Decimal hours rendered as ``H:MM`` (7.5 -> ``7:30``), rounded to the nearest minute."""

    total_minutes = int((to_decimal(hours) * MINUTES_PER_HOUR).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    sign = "-" if total_minutes < 0 else ""
    h, m = divmod(abs(total_minutes), 60)
    return f"{sign}{h}:{m:02d}"


def round_money(amount: Any) -> Decimal:
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Any) -> str:
    return f"${round_money(amount):,.2f}"


def format_time_of_day(value) -> str:
    if value is None:
        return "-"
    if hasattr(value, "strftime"):
        return value.strftime("%H:%M")
    return str(value)
