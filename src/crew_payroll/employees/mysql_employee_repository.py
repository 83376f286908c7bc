from __future__ import annotations

from typing import Any, Dict, Hashable, Optional, Sequence

from ..common.validators import to_non_negative_decimal
from ..core.enums import EmployeeType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "id, first_name, last_name, type, regular_rate, overtime_rate"


def _employee_type(value: Any) -> EmployeeType:
    try:
        return EmployeeType(value)
    except ValueError:
        return EmployeeType.EMPLOYEE


def employee_from_row(row: Dict[str, Any]) -> Employee:
    """Rate card columns may be NULL or junk; both read as a 0 rate."""

    return Employee(
        employee_id=row["id"],
        first_name=(row.get("first_name") or "").strip(),
        last_name=(row.get("last_name") or "").strip(),
        employee_type=_employee_type(row.get("type")),
        regular_rate=to_non_negative_decimal(row.get("regular_rate")),
        overtime_rate=to_non_negative_decimal(row.get("overtime_rate")),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY last_name, first_name")
            return [employee_from_row(r) for r in fetchall(cur)]

    def get_by_id(self, employee_id: Hashable) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=%s", (employee_id,))
            r = fetchone(cur)
            if not r:
                return None
            return employee_from_row(r)
