from __future__ import annotations

from typing import Hashable, Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, employee_id: Hashable) -> Optional[Employee]:
        raise NotImplementedError
