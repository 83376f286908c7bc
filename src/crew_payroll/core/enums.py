from __future__ import annotations

from enum import Enum


class EmployeeType(str, Enum):
    """Employee categories kept on the employees table."""

    EMPLOYEE = "Employee"
    FOREMAN = "Foreman"
    PM = "PM"


class LineWarning(str, Enum):
    """Data-quality conditions attached to a payroll line.

    A line carrying any of these still has well-defined (possibly zero) figures; the
    code tells an operator why a shift paid less than expected.
    """

    MISSING_TIME = "MISSING_TIME"
    UNPARSEABLE_TIME = "UNPARSEABLE_TIME"
    END_BEFORE_START = "END_BEFORE_START"
    MISSING_RATE = "MISSING_RATE"


class ReportPeriod(str, Enum):
    """Named date ranges offered by the report filters."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    LAST_7_DAYS = "last7days"
    LAST_30_DAYS = "last30days"
    THIS_MONTH = "thisMonth"
    LAST_MONTH = "lastMonth"
    CUSTOM_WEEK = "custom"


class Granularity(str, Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
