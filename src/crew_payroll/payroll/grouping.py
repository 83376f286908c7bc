"""Group key functions for ``engine.aggregate``.

Each key is derived from the line's own entry date, so a line never straddles two
buckets.
"""

from __future__ import annotations

from datetime import date
from typing import Hashable, Tuple

from ..common.datetime_utils import month_start, week_start
from ..core.constants import DEFAULT_WEEK_STARTS_ON
from ..core.enums import Granularity
from ..core.exceptions import ValidationError
from .engine import GroupKeyFn
from .model import PayrollLine


def by_employee(line: PayrollLine) -> Hashable:
    return line.entry.employee_id


def by_date(line: PayrollLine) -> date:
    return line.entry.date


def by_jobsite(line: PayrollLine) -> Hashable:
    return line.entry.jobsite_id


def by_employee_day(line: PayrollLine) -> Tuple[Hashable, date]:
    return (line.entry.employee_id, line.entry.date)


def by_employee_week(week_starts_on: int = DEFAULT_WEEK_STARTS_ON) -> GroupKeyFn:
    def key(line: PayrollLine) -> Tuple[Hashable, date]:
        return (line.entry.employee_id, week_start(line.entry.date, week_starts_on))

    return key


def by_employee_month(line: PayrollLine) -> Tuple[Hashable, date]:
    return (line.entry.employee_id, month_start(line.entry.date))


def for_granularity(granularity: Granularity, *, week_starts_on: int = DEFAULT_WEEK_STARTS_ON) -> GroupKeyFn:
    """(employee_id, period_start) key for a period summary."""

    try:
        granularity = Granularity(granularity)
    except ValueError as exc:
        raise ValidationError(f"Unknown granularity: {granularity!r}") from exc

    if granularity is Granularity.DAY:
        return by_employee_day
    if granularity is Granularity.WEEK:
        return by_employee_week(week_starts_on)
    return by_employee_month
