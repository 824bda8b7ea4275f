from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .repository import ActivityLogRepository


class MySQLActivityLogRepository(ActivityLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def record(self, *, user_id: Optional[int], action: str, meta_json: Optional[str], ip_address: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO logs(user_id, action, meta_json, ip_address)
                VALUES(%s,%s,%s,%s)
                """,
                (user_id, action[:255], meta_json, ip_address),
            )
            return int(cur.lastrowid)
