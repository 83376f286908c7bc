from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Hashable, Optional, Union

TimeValue = Union[time, str, None]


@dataclass(frozen=True)
class AttendanceEntry:
    """One employee, one shift, one day, as recorded on the attendance table.

    ``start_time``/``end_time`` are kept as supplied when they cannot be parsed so the
    engine can report them as malformed instead of missing.
    """

    employee_id: Hashable
    jobsite_id: Hashable
    date: date
    start_time: TimeValue
    end_time: TimeValue
    minute_deduction: Union[int, Decimal, str, None] = 0
    attendance_id: Optional[Hashable] = None
