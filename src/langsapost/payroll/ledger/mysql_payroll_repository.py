from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Sequence

import mysql.connector

from ...core.exceptions import DuplicatePayrollError
from ...database.connection import DatabaseConnection
from ...database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from ..model import NewPayroll, Payroll, PayrollFilter
from .repository import PayrollRepository

_SELECT = """
    SELECT p.id, p.author_id, p.month, p.year, p.article_count,
           p.article_bonus, p.view_bonus, p.gross, p.deductions, p.total,
           p.document_ref, p.created_at,
           u.name AS author_name, u.email AS author_email
    FROM payrolls p
    LEFT JOIN users u ON u.id = p.author_id
"""

# Filter field -> column. Only these ever reach the WHERE clause.
_FILTER_COLUMNS = {
    "author_id": "p.author_id",
    "month": "p.month",
    "year": "p.year",
}


def _dec(value: Any) -> Decimal:
    return Decimal(str(value if value is not None else 0))


def _to_payroll(row: dict) -> Payroll:
    return Payroll(
        payroll_id=int(row["id"]),
        author_id=int(row["author_id"]),
        month=int(row["month"]),
        year=int(row["year"]),
        article_count=int(row.get("article_count") or 0),
        article_bonus=_dec(row.get("article_bonus")),
        view_bonus=_dec(row.get("view_bonus")),
        gross=_dec(row.get("gross")),
        deductions=_dec(row.get("deductions")),
        total=_dec(row.get("total")),
        document_ref=row.get("document_ref"),
        created_at=row.get("created_at"),
        author_name=row.get("author_name"),
        author_email=row.get("author_email"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists(self, author_id: int, month: int, year: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM payrolls WHERE author_id=%s AND month=%s AND year=%s LIMIT 1",
                (int(author_id), int(month), int(year)),
            )
            return fetchone(cur) is not None

    def insert(self, payroll: NewPayroll) -> int:
        b = payroll.breakdown
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO payrolls(
                        author_id, month, year, article_count, article_bonus,
                        view_bonus, gross, deductions, total, document_ref
                    ) VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(payroll.author_id),
                        payroll.period.month,
                        payroll.period.year,
                        b.article_count,
                        b.article_bonus,
                        b.view_bonus,
                        b.gross,
                        b.deductions,
                        b.total,
                        payroll.document_ref,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.Error as e:
            if is_duplicate_key(e):
                raise DuplicatePayrollError(payroll.author_id, payroll.period.month, payroll.period.year) from e
            raise

    def list_for(self, flt: PayrollFilter, *, limit: int) -> Sequence[Payroll]:
        where: list[str] = []
        params: list[Any] = []
        for field_name, column in _FILTER_COLUMNS.items():
            value = getattr(flt, field_name)
            if value is not None:
                where.append(f"{column}=%s")
                params.append(int(value))

        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY p.year DESC, p.month DESC, p.author_id ASC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_payroll(r) for r in fetchall(cur)]

    def get_by_id(self, payroll_id: int) -> Optional[Payroll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE p.id=%s", (int(payroll_id),))
            row = fetchone(cur)
            return _to_payroll(row) if row else None
