from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import AttendanceEntry
from ...employees.model import EmployeeRate
from ..model import PayrollLine


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute_line(self, entry: AttendanceEntry, rate: Optional[EmployeeRate]) -> PayrollLine:
        raise NotImplementedError
