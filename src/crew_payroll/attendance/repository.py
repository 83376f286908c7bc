from __future__ import annotations

from datetime import date
from typing import Hashable, Optional, Protocol, Sequence

from .model import AttendanceEntry


class AttendanceRepository(Protocol):
    def list_entries(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_ids: Optional[Sequence[Hashable]] = None,
        jobsite_ids: Optional[Sequence[Hashable]] = None,
    ) -> Sequence[AttendanceEntry]:
        """Entries dated within [start_date, end_date].

        ``None`` means no filter; an empty sequence matches nothing.
        """

        raise NotImplementedError
