from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import JobSite
from .repository import JobSiteRepository


class MySQLJobSiteRepository(JobSiteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[JobSite]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, name, status FROM job_sites ORDER BY name")
            rows = fetchall(cur)
            return [JobSite(jobsite_id=r["id"], name=r.get("name") or "", status=r.get("status") or "") for r in rows]
