from datetime import date
from decimal import Decimal

import pytest

from crew_payroll.attendance.model import AttendanceEntry
from crew_payroll.core.enums import Granularity
from crew_payroll.core.exceptions import ValidationError
from crew_payroll.employees.model import EmployeeRate
from crew_payroll.payroll import grouping
from crew_payroll.payroll.engine import aggregate, compute_line

RATE = EmployeeRate(employee_id=1, regular_rate=Decimal("20"), overtime_rate=Decimal("30"))


def _line(day, employee_id=1, jobsite_id="A"):
    entry = AttendanceEntry(
        employee_id=employee_id,
        jobsite_id=jobsite_id,
        date=day,
        start_time="08:00",
        end_time="16:00",
    )
    return compute_line(entry, RATE)


def test_week_key_starts_on_sunday_by_default():
    # 2025-03-08 is a Saturday, 2025-03-09 a Sunday
    key = grouping.by_employee_week()

    assert key(_line(date(2025, 3, 8))) == (1, date(2025, 3, 2))
    assert key(_line(date(2025, 3, 9))) == (1, date(2025, 3, 9))


def test_week_key_can_start_on_monday():
    key = grouping.by_employee_week(week_starts_on=0)

    assert key(_line(date(2025, 3, 9))) == (1, date(2025, 3, 3))


def test_month_key_uses_entry_date_only():
    lines = [_line(date(2025, 1, 31)), _line(date(2025, 2, 1)), _line(date(2025, 2, 28))]

    result = aggregate(lines, grouping.by_employee_month)

    assert set(result) == {(1, date(2025, 1, 1)), (1, date(2025, 2, 1))}
    assert result[(1, date(2025, 2, 1))].total_hours == Decimal("16")


def test_scalar_keys():
    line = _line(date(2025, 3, 3), employee_id=7, jobsite_id="B")

    assert grouping.by_employee(line) == 7
    assert grouping.by_date(line) == date(2025, 3, 3)
    assert grouping.by_jobsite(line) == "B"
    assert grouping.by_employee_day(line) == (7, date(2025, 3, 3))


def test_for_granularity():
    line = _line(date(2025, 3, 5))

    assert grouping.for_granularity(Granularity.DAY)(line) == (1, date(2025, 3, 5))
    assert grouping.for_granularity("week")(line) == (1, date(2025, 3, 2))
    assert grouping.for_granularity(Granularity.MONTH)(line) == (1, date(2025, 3, 1))

    with pytest.raises(ValidationError):
        grouping.for_granularity("fortnight")
