from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ...core.enums import ComponentKind
from ...database.connection import DatabaseConnection
from ...database.mysql_base import db_cursor, fetchall, fetchone
from ..model import SalaryComponent
from .repository import SalaryComponentRepository

_COLUMNS = "id, name, kind, value, is_active, created_at"


def _to_component(row: dict) -> SalaryComponent:
    return SalaryComponent(
        component_id=int(row["id"]),
        name=row["name"],
        kind=ComponentKind.parse(row["kind"]),
        value=Decimal(str(row["value"])),
        active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
    )


class MySQLSalaryComponentRepository(SalaryComponentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[SalaryComponent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_components WHERE is_active=1 ORDER BY id ASC")
            return [_to_component(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[SalaryComponent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_components ORDER BY id ASC")
            return [_to_component(r) for r in fetchall(cur)]

    def get_by_id(self, component_id: int) -> Optional[SalaryComponent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_components WHERE id=%s", (int(component_id),))
            row = fetchone(cur)
            return _to_component(row) if row else None

    def create(self, *, name: str, kind: ComponentKind, value: Decimal, active: bool) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salary_components(name, kind, value, is_active)
                VALUES(%s,%s,%s,%s)
                """,
                (name, kind.value, value, 1 if active else 0),
            )
            return int(cur.lastrowid)

    def update(self, *, component_id: int, name: str, kind: ComponentKind, value: Decimal, active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salary_components
                SET name=%s, kind=%s, value=%s, is_active=%s
                WHERE id=%s
                """,
                (name, kind.value, value, 1 if active else 0, int(component_id)),
            )
            return cur.rowcount > 0
