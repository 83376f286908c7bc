from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Any, Optional

from ..core.constants import DEFAULT_WEEK_STARTS_ON
from ..core.enums import ReportPeriod
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar range used to query attendance."""

    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise ValidationError(f"Date range ends ({self.end}) before it starts ({self.start})")

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_time_of_day(value: Any) -> Optional[time]:
    """Parse a time-of-day value, returning None when it cannot be read.

    Accepts ``datetime.time``, ``datetime.timedelta`` (how mysql-connector returns
    TIME columns) and ``H:MM`` / ``HH:MM:SS`` strings.
    """

    if value is None:
        return None

    if isinstance(value, datetime):
        return value.time()

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds())
        if total_seconds < 0 or total_seconds >= 86400:
            return None
        return time(hour=total_seconds // 3600, minute=(total_seconds % 3600) // 60, second=total_seconds % 60)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) not in (2, 3):
            return None
        try:
            numbers = [int(p) for p in parts]
        except ValueError:
            return None
        if len(numbers) == 2:
            numbers.append(0)
        hours, minutes, seconds = numbers
        if not (0 <= hours <= 23 and 0 <= minutes <= 59 and 0 <= seconds <= 59):
            return None
        return time(hour=hours, minute=minutes, second=seconds)

    return None


def seconds_of_day(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def week_start(day: date, week_starts_on: int = DEFAULT_WEEK_STARTS_ON) -> date:
    """First day of the week containing ``day`` (``week_starts_on`` uses weekday() numbering)."""
    return day - timedelta(days=(day.weekday() - week_starts_on) % 7)


def month_start(day: date) -> date:
    return day.replace(day=1)


def month_end(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def resolve_period(
    period: ReportPeriod | str,
    *,
    today: date,
    week_of: Optional[date] = None,
    week_starts_on: int = DEFAULT_WEEK_STARTS_ON,
) -> DateRange:
    """Turn a named report period into an inclusive date range.

    ``week_of`` picks the week for ``CUSTOM_WEEK``; it defaults to the current week.
    """

    try:
        period = ReportPeriod(period)
    except ValueError as exc:
        raise ValidationError(f"Unknown report period: {period!r}") from exc

    if period is ReportPeriod.TODAY:
        return DateRange(today, today)
    if period is ReportPeriod.YESTERDAY:
        yesterday = today - timedelta(days=1)
        return DateRange(yesterday, yesterday)
    if period is ReportPeriod.LAST_7_DAYS:
        return DateRange(today - timedelta(days=6), today)
    if period is ReportPeriod.LAST_30_DAYS:
        return DateRange(today - timedelta(days=29), today)
    if period is ReportPeriod.THIS_MONTH:
        return DateRange(month_start(today), month_end(today))
    if period is ReportPeriod.LAST_MONTH:
        last_month = month_start(today) - timedelta(days=1)
        return DateRange(month_start(last_month), month_end(last_month))

    start = week_start(week_of or today, week_starts_on)
    return DateRange(start, start + timedelta(days=6))
