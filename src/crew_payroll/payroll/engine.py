"""Payroll derivation: attendance entry + rate card -> payroll line, and folds over lines.

Every report view goes through these functions; they differ only in how lines are
grouped and displayed. Nothing here performs I/O or raises on bad attendance data:
malformed times and missing deductions or rates degrade to zero contributions, with a
``LineWarning`` attached to the line.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Tuple

from ..attendance.model import AttendanceEntry
from ..common.datetime_utils import parse_time_of_day, seconds_of_day
from ..common.validators import coerce_minutes, require_non_negative, to_non_negative_decimal
from ..core.constants import DEFAULT_DAILY_THRESHOLD, MINUTES_PER_HOUR, ZERO
from ..core.enums import LineWarning
from ..core.logging import get_logger
from ..employees.model import EmployeeRate
from .model import AggregateTotals, PayrollLine

logger = get_logger(__name__)

GroupKeyFn = Callable[[PayrollLine], Hashable]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def shift_hours_with_warnings(start_time: Any, end_time: Any) -> Tuple[Decimal, Tuple[LineWarning, ...]]:
    """Elapsed hours between two times of day, plus the reason when it is forced to 0."""

    if _is_blank(start_time) or _is_blank(end_time):
        return ZERO, (LineWarning.MISSING_TIME,)

    start = parse_time_of_day(start_time)
    end = parse_time_of_day(end_time)
    if start is None or end is None:
        return ZERO, (LineWarning.UNPARSEABLE_TIME,)

    elapsed_seconds = seconds_of_day(end) - seconds_of_day(start)
    if elapsed_seconds < 0:
        # No overnight shifts: end before start is bad data, not "next day".
        return ZERO, (LineWarning.END_BEFORE_START,)

    return Decimal(elapsed_seconds // 60) / MINUTES_PER_HOUR, ()


def compute_shift_hours(start_time: Any, end_time: Any) -> Decimal:
    hours, _ = shift_hours_with_warnings(start_time, end_time)
    return hours


def compute_line(
    entry: AttendanceEntry,
    rate: Optional[EmployeeRate],
    daily_threshold: Any = DEFAULT_DAILY_THRESHOLD,
) -> PayrollLine:
    """Derive hours and pay for one attendance entry.

    The threshold applies per entry: two entries on the same date are each split at
    ``daily_threshold`` on their own.
    """

    threshold = require_non_negative(daily_threshold, "daily_threshold")

    shift_hours, warnings = shift_hours_with_warnings(entry.start_time, entry.end_time)
    deducted_hours = coerce_minutes(entry.minute_deduction) / MINUTES_PER_HOUR
    total_hours = max(shift_hours - deducted_hours, ZERO)

    regular_hours = min(total_hours, threshold)
    overtime_hours = total_hours - regular_hours

    if rate is None:
        warnings = warnings + (LineWarning.MISSING_RATE,)
        regular_rate = overtime_rate = ZERO
    else:
        regular_rate = to_non_negative_decimal(rate.regular_rate)
        overtime_rate = to_non_negative_decimal(rate.overtime_rate)

    regular_pay = regular_hours * regular_rate
    overtime_pay = overtime_hours * overtime_rate

    if warnings:
        logger.debug(
            "attendance %s (employee %s, %s) flagged: %s",
            entry.attendance_id,
            entry.employee_id,
            entry.date,
            ", ".join(w.value for w in warnings),
        )

    return PayrollLine(
        entry=entry,
        shift_hours=shift_hours,
        deducted_hours=deducted_hours,
        total_hours=total_hours,
        regular_hours=regular_hours,
        overtime_hours=overtime_hours,
        regular_rate=regular_rate,
        overtime_rate=overtime_rate,
        regular_pay=regular_pay,
        overtime_pay=overtime_pay,
        total_pay=regular_pay + overtime_pay,
        warnings=warnings,
    )


def compute_lines(
    entries: Iterable[AttendanceEntry],
    rates: Dict[Hashable, EmployeeRate],
    daily_threshold: Any = DEFAULT_DAILY_THRESHOLD,
) -> List[PayrollLine]:
    return [compute_line(e, rates.get(e.employee_id), daily_threshold) for e in entries]


def aggregate(lines: Iterable[PayrollLine], group_key: GroupKeyFn) -> Dict[Hashable, AggregateTotals]:
    """Sum lines per group key, keeping first-seen key order.

    A line lands in exactly one bucket, chosen from its own entry; nothing is prorated.
    """

    buckets: Dict[Hashable, List[PayrollLine]] = {}
    for line in lines:
        buckets.setdefault(group_key(line), []).append(line)
    return {key: AggregateTotals.from_lines(group) for key, group in buckets.items()}


def merge_totals(left: AggregateTotals, right: AggregateTotals) -> AggregateTotals:
    return left.merge(right)


def merge_aggregates(
    left: Dict[Hashable, AggregateTotals],
    right: Dict[Hashable, AggregateTotals],
) -> Dict[Hashable, AggregateTotals]:
    merged = dict(left)
    for key, totals in right.items():
        merged[key] = merged[key].merge(totals) if key in merged else totals
    return merged
