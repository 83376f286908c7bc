from __future__ import annotations

from datetime import date, time
from decimal import Decimal

import pytest

from crew_payroll.attendance.model import AttendanceEntry
from crew_payroll.core.enums import LineWarning
from crew_payroll.core.exceptions import ValidationError
from crew_payroll.employees.model import EmployeeRate
from crew_payroll.payroll.engine import (
    aggregate,
    compute_line,
    compute_lines,
    compute_shift_hours,
    merge_aggregates,
    merge_totals,
    shift_hours_with_warnings,
)
from crew_payroll.payroll.grouping import by_employee
from crew_payroll.payroll.model import AggregateTotals

RATE = EmployeeRate(employee_id=1, regular_rate=Decimal("20"), overtime_rate=Decimal("30"))


def _entry(start="08:00", end="16:00", deduct=0, *, employee_id=1, day=date(2025, 3, 3), jobsite_id=10):
    return AttendanceEntry(
        employee_id=employee_id,
        jobsite_id=jobsite_id,
        date=day,
        start_time=start,
        end_time=end,
        minute_deduction=deduct,
    )


def test_eight_hour_shift_with_half_hour_break():
    line = compute_line(_entry("08:00", "16:00", 30), RATE)

    assert line.shift_hours == Decimal("8")
    assert line.deducted_hours == Decimal("0.5")
    assert line.total_hours == Decimal("7.5")
    assert line.regular_hours == Decimal("7.5")
    assert line.overtime_hours == 0
    assert line.regular_pay == Decimal("150.00")
    assert line.overtime_pay == 0
    assert line.total_pay == Decimal("150.00")
    assert line.warnings == ()


def test_twelve_hour_shift_splits_at_threshold():
    line = compute_line(_entry("07:00", "19:00", 0), RATE)

    assert line.shift_hours == Decimal("12")
    assert line.total_hours == Decimal("12")
    assert line.regular_hours == Decimal("8")
    assert line.overtime_hours == Decimal("4")
    assert line.regular_pay == Decimal("160")
    assert line.overtime_pay == Decimal("120")
    assert line.total_pay == Decimal("280")


def test_end_before_start_is_zero_and_flagged():
    line = compute_line(_entry("09:00", "08:00"), RATE)

    assert line.shift_hours == 0
    assert line.total_hours == 0
    assert line.total_pay == 0
    assert LineWarning.END_BEFORE_START in line.warnings


def test_deduction_longer_than_shift_floors_at_zero():
    line = compute_line(_entry("08:00", "16:00", 600), RATE)

    assert line.shift_hours == Decimal("8")
    assert line.total_hours == 0
    assert line.regular_hours == 0
    assert line.overtime_hours == 0
    assert line.total_pay == 0


def test_two_entries_same_day_are_capped_independently():
    day = date(2025, 3, 3)
    lines = [
        compute_line(_entry("06:00", "14:00", jobsite_id=10, day=day), RATE),
        compute_line(_entry("14:00", "22:00", jobsite_id=11, day=day), RATE),
    ]

    totals = aggregate(lines, by_employee)[1]

    assert totals.total_days == 1
    assert totals.total_hours == Decimal("16")
    assert totals.regular_hours == Decimal("16")
    assert totals.overtime_hours == 0


@pytest.mark.parametrize(
    "start, end, expected",
    [
        ("08:00", "16:30", Decimal("8.5")),
        ("08:00:00", "12:15:00", Decimal("4.25")),
        (time(6, 0), time(6, 45), Decimal("0.75")),
        ("08:00", "08:00", Decimal("0")),
    ],
)
def test_compute_shift_hours(start, end, expected):
    assert compute_shift_hours(start, end) == expected


def test_shift_hours_ignores_partial_minutes():
    assert compute_shift_hours("08:00:40", "09:00:10") == Decimal(59) / Decimal(60)


@pytest.mark.parametrize(
    "start, end, warning",
    [
        (None, "16:00", LineWarning.MISSING_TIME),
        ("08:00", "", LineWarning.MISSING_TIME),
        ("8am", "16:00", LineWarning.UNPARSEABLE_TIME),
        ("08:00", "25:00", LineWarning.UNPARSEABLE_TIME),
        ("17:00", "16:59", LineWarning.END_BEFORE_START),
    ],
)
def test_bad_times_degrade_to_zero_with_warning(start, end, warning):
    hours, warnings = shift_hours_with_warnings(start, end)

    assert hours == 0
    assert warnings == (warning,)


@pytest.mark.parametrize("deduct", [None, "", "abc", -15, float("nan")])
def test_missing_or_bad_deduction_counts_as_zero(deduct):
    line = compute_line(_entry("08:00", "16:00", deduct), RATE)

    assert line.deducted_hours == 0
    assert line.total_hours == Decimal("8")


def test_string_deduction_is_accepted():
    line = compute_line(_entry("08:00", "16:00", "45"), RATE)

    assert line.deducted_hours == Decimal("0.75")


def test_missing_rate_pays_zero_and_is_flagged():
    line = compute_line(_entry("07:00", "19:00"), None)

    assert line.total_hours == Decimal("12")
    assert line.overtime_hours == Decimal("4")
    assert line.total_pay == 0
    assert line.warnings == (LineWarning.MISSING_RATE,)


def test_non_numeric_rate_reads_as_zero():
    rate = EmployeeRate(employee_id=1, regular_rate="n/a", overtime_rate=None)

    line = compute_line(_entry("07:00", "19:00"), rate)

    assert line.regular_rate == 0
    assert line.overtime_rate == 0
    assert line.total_pay == 0


def test_threshold_is_a_parameter():
    line = compute_line(_entry("07:00", "19:00"), RATE, daily_threshold=10)

    assert line.regular_hours == Decimal("10")
    assert line.overtime_hours == Decimal("2")
    assert line.total_pay == Decimal("260")


def test_negative_threshold_is_rejected():
    with pytest.raises(ValidationError):
        compute_line(_entry(), RATE, daily_threshold=-1)


def test_split_adds_back_to_total_exactly():
    for start, end, deduct in [
        ("06:07", "18:00", 13),
        ("05:00", "23:59", 7),
        ("08:00", "16:20", 0),
        ("00:00", "23:59", 1),
        ("09:13", "15:01", 0),
    ]:
        line = compute_line(_entry(start, end, deduct), RATE)
        assert line.regular_hours + line.overtime_hours == line.total_hours
        assert line.regular_hours <= Decimal("8")
        if line.total_hours <= Decimal("8"):
            assert line.overtime_hours == 0
        else:
            assert line.overtime_hours == line.total_hours - Decimal("8")


def test_compute_line_is_pure():
    entry = _entry("07:00", "19:00", 20)

    first = compute_line(entry, RATE)
    second = compute_line(entry, RATE)

    assert first == second
    assert entry.minute_deduction == 20


def test_compute_lines_looks_up_rates_by_employee():
    entries = [_entry(employee_id=1), _entry(employee_id=2)]

    lines = compute_lines(entries, {1: RATE})

    assert lines[0].total_pay == Decimal("160")
    assert lines[1].warnings == (LineWarning.MISSING_RATE,)


def test_aggregation_merges_like_one_pass():
    a = compute_line(_entry("07:00", "19:00", day=date(2025, 3, 3)), RATE)
    b = compute_line(_entry("08:00", "12:00", day=date(2025, 3, 4)), RATE)
    c = compute_line(_entry("08:00", "17:00", 60, day=date(2025, 3, 4)), RATE)

    merged = merge_aggregates(aggregate([a, b], by_employee), aggregate([c], by_employee))
    direct = aggregate([a, b, c], by_employee)

    assert merged == direct
    assert direct[1].total_days == 2
    assert direct[1].entry_count == 3
    assert merge_totals(AggregateTotals.from_lines([c]), AggregateTotals.from_lines([a, b])) == direct[1]


def test_aggregate_groups_by_key_in_first_seen_order():
    lines = [
        compute_line(_entry(employee_id=2), RATE),
        compute_line(_entry(employee_id=1), RATE),
        compute_line(_entry(employee_id=2, day=date(2025, 3, 4)), RATE),
    ]

    result = aggregate(lines, by_employee)

    assert list(result) == [2, 1]
    assert result[2].total_days == 2
    assert result[2].total_pay == Decimal("320")


def test_average_hours_per_day():
    lines = [
        compute_line(_entry("08:00", "12:00", day=date(2025, 3, 3)), RATE),
        compute_line(_entry("13:00", "15:00", day=date(2025, 3, 3)), RATE),
        compute_line(_entry("08:00", "14:00", day=date(2025, 3, 4)), RATE),
    ]

    totals = AggregateTotals.from_lines(lines)

    assert totals.total_days == 2
    assert totals.average_hours_per_day == Decimal("6")
    assert AggregateTotals().average_hours_per_day == 0
