from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Hashable

from ..core.enums import EmployeeType


@dataclass(frozen=True)
class EmployeeRate:
    """Rate card: hourly pay for regular and overtime hours, effective now."""

    employee_id: Hashable
    regular_rate: Decimal
    overtime_rate: Decimal


@dataclass(frozen=True)
class Employee:
    employee_id: Hashable
    first_name: str
    last_name: str
    employee_type: EmployeeType
    regular_rate: Decimal
    overtime_rate: Decimal

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def rate(self) -> EmployeeRate:
        return EmployeeRate(
            employee_id=self.employee_id,
            regular_rate=self.regular_rate,
            overtime_rate=self.overtime_rate,
        )
