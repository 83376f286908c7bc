from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import mysql.connector

from ..core.exceptions import DataSourceError
from ..core.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def db_cursor(conn_factory, *, dictionary: bool = True):
    """Open a connection + cursor for one read, translating driver errors."""

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("database connection failed: %s", exc)
        raise DataSourceError(f"Cannot connect to database: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        logger.error("database query failed: %s", exc)
        raise DataSourceError(f"Database query failed: {exc}") from exc
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(column: str, values: Iterable[Any]) -> Tuple[str, List[Any]]:
    """``column IN (%s, %s, ...)`` with its parameters; caller guarantees values is non-empty."""

    params = list(values)
    placeholders = ", ".join(["%s"] * len(params))
    return f"{column} IN ({placeholders})", params


def where_sql(clauses: Sequence[str]) -> str:
    return " AND ".join(clauses) if clauses else "1=1"
