from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import FrozenSet, Hashable, Iterable, Tuple

from ..attendance.model import AttendanceEntry
from ..core.constants import ZERO
from ..core.enums import LineWarning


@dataclass(frozen=True)
class PayrollLine:
    """Pay figures derived from a single attendance entry.

    Hours and money are plain Decimals; display formatting happens in reports.
    """

    entry: AttendanceEntry
    shift_hours: Decimal
    deducted_hours: Decimal
    total_hours: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal
    regular_rate: Decimal
    overtime_rate: Decimal
    regular_pay: Decimal
    overtime_pay: Decimal
    total_pay: Decimal
    warnings: Tuple[LineWarning, ...] = ()

    @property
    def day_key(self) -> Tuple[Hashable, date]:
        return (self.entry.employee_id, self.entry.date)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


@dataclass(frozen=True)
class AggregateTotals:
    """Summed figures over a group of payroll lines.

    ``day_keys`` holds the distinct (employee_id, date) pairs seen, so ``total_days``
    survives merging two partial totals.
    """

    total_hours: Decimal = ZERO
    regular_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    regular_pay: Decimal = ZERO
    overtime_pay: Decimal = ZERO
    total_pay: Decimal = ZERO
    entry_count: int = 0
    day_keys: FrozenSet[Tuple[Hashable, date]] = field(default_factory=frozenset)

    @property
    def total_days(self) -> int:
        return len(self.day_keys)

    @property
    def average_hours_per_day(self) -> Decimal:
        if not self.day_keys:
            return ZERO
        return self.total_hours / Decimal(len(self.day_keys))

    @classmethod
    def from_lines(cls, lines: Iterable[PayrollLine]) -> "AggregateTotals":
        total_hours = regular_hours = overtime_hours = ZERO
        regular_pay = overtime_pay = total_pay = ZERO
        count = 0
        days = set()

        for line in lines:
            total_hours += line.total_hours
            regular_hours += line.regular_hours
            overtime_hours += line.overtime_hours
            regular_pay += line.regular_pay
            overtime_pay += line.overtime_pay
            total_pay += line.total_pay
            count += 1
            days.add(line.day_key)

        return cls(
            total_hours=total_hours,
            regular_hours=regular_hours,
            overtime_hours=overtime_hours,
            regular_pay=regular_pay,
            overtime_pay=overtime_pay,
            total_pay=total_pay,
            entry_count=count,
            day_keys=frozenset(days),
        )

    def merge(self, other: "AggregateTotals") -> "AggregateTotals":
        return AggregateTotals(
            total_hours=self.total_hours + other.total_hours,
            regular_hours=self.regular_hours + other.regular_hours,
            overtime_hours=self.overtime_hours + other.overtime_hours,
            regular_pay=self.regular_pay + other.regular_pay,
            overtime_pay=self.overtime_pay + other.overtime_pay,
            total_pay=self.total_pay + other.total_pay,
            entry_count=self.entry_count + other.entry_count,
            day_keys=self.day_keys | other.day_keys,
        )
