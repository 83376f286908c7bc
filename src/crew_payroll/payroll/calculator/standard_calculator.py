from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from ...attendance.model import AttendanceEntry
from ...common.validators import require_non_negative
from ...core.constants import DEFAULT_DAILY_THRESHOLD
from ...employees.model import EmployeeRate
from ..engine import compute_line
from ..model import PayrollLine
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: (end - start) - deduction, not below 0; hours past the
    threshold of each entry are overtime."""

    def __init__(self, daily_threshold: Any = DEFAULT_DAILY_THRESHOLD):
        self._daily_threshold = require_non_negative(daily_threshold, "daily_threshold")

    @property
    def daily_threshold(self) -> Decimal:
        return self._daily_threshold

    def compute_line(self, entry: AttendanceEntry, rate: Optional[EmployeeRate]) -> PayrollLine:
        return compute_line(entry, rate, self._daily_threshold)
