from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Hashable, Optional, Sequence

from ..common.datetime_utils import parse_iso_date, parse_time_of_day
from ..common.validators import coerce_minutes
from ..core.exceptions import ValidationError
from ..core.logging import get_logger
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, where_sql
from .model import AttendanceEntry, TimeValue
from .repository import AttendanceRepository

logger = get_logger(__name__)


def _time_value(value: Any) -> TimeValue:
    # Unreadable values stay as text so the engine flags them as malformed.
    if value is None:
        return None
    parsed = parse_time_of_day(value)
    if parsed is not None:
        return parsed
    return str(value).strip()


def _date_value(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip())
    except ValueError as exc:
        raise ValidationError(f"Invalid attendance date: {value!r}") from exc


def entry_from_row(row: Dict[str, Any]) -> AttendanceEntry:
    """Convert an ``attendance`` row into an entry, normalising TIME and deduction values."""

    return AttendanceEntry(
        attendance_id=row.get("id"),
        employee_id=row["employee_id"],
        jobsite_id=row.get("jobsite_id"),
        date=_date_value(row.get("date")),
        start_time=_time_value(row.get("start_time")),
        end_time=_time_value(row.get("end_time")),
        minute_deduction=coerce_minutes(row.get("minute_deduct")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_entries(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_ids: Optional[Sequence[Hashable]] = None,
        jobsite_ids: Optional[Sequence[Hashable]] = None,
    ) -> Sequence[AttendanceEntry]:
        if (employee_ids is not None and not employee_ids) or (jobsite_ids is not None and not jobsite_ids):
            return []

        clauses = ["a.date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if employee_ids is not None:
            clause, values = in_clause("a.employee_id", employee_ids)
            clauses.append(clause)
            params.extend(values)
        if jobsite_ids is not None:
            clause, values = in_clause("a.jobsite_id", jobsite_ids)
            clauses.append(clause)
            params.extend(values)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.id, a.employee_id, a.jobsite_id, a.date,
                       a.start_time, a.end_time, a.minute_deduct
                FROM attendance a
                WHERE {where_sql(clauses)}
                ORDER BY a.date DESC, a.employee_id ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

        entries: list[AttendanceEntry] = []
        for r in rows:
            try:
                entries.append(entry_from_row(r))
            except ValidationError as exc:
                logger.warning("skipping attendance row %s: %s", r.get("id"), exc)
        return entries
