from datetime import datetime
from decimal import Decimal

import mysql.connector
import pytest
from mysql.connector import errorcode

from langsapost.core.exceptions import DuplicatePayrollError
from langsapost.payroll.ledger.mysql_payroll_repository import MySQLPayrollRepository
from langsapost.payroll.model import NewPayroll, PayrollBreakdown, PayrollFilter, Period

from fakes import FakeConnection, FakeConnFactory


ROW = {
    "id": 5,
    "author_id": 2,
    "month": 1,
    "year": 2026,
    "article_count": 3,
    "article_bonus": Decimal("150000.00"),
    "view_bonus": Decimal("20000.00"),
    "gross": Decimal("3170000.00"),
    "deductions": Decimal("158500.00"),
    "total": Decimal("3011500.00"),
    "document_ref": "payroll_2_2026_1_abc.pdf",
    "created_at": datetime(2026, 2, 25, 9, 0),
    "author_name": "Budi Santoso",
    "author_email": "budi@langsapost.test",
}


def _new_payroll() -> NewPayroll:
    breakdown = PayrollBreakdown(
        3, Decimal("3000000"), Decimal("150000"), Decimal("20000"), Decimal("3170000"),
        Decimal("158500"), Decimal("0.05"), Decimal("3011500"),
    )
    return NewPayroll(author_id=2, period=Period(year=2026, month=1), breakdown=breakdown, document_ref="x.pdf")


def test_list_for_builds_where_from_filter_fields_only():
    conn = FakeConnection(rows=[ROW])
    repo = MySQLPayrollRepository(FakeConnFactory(conn))

    payrolls = repo.list_for(PayrollFilter(author_id=2, year=2026), limit=50)

    sql, params = conn.executed[0]
    assert "WHERE p.author_id=%s AND p.year=%s" in sql
    assert sql.endswith("ORDER BY p.year DESC, p.month DESC, p.author_id ASC LIMIT %s")
    assert params == (2, 2026, 50)
    assert payrolls[0].total == Decimal("3011500.00")
    assert payrolls[0].author_name == "Budi Santoso"


def test_list_for_without_filters_has_no_where():
    conn = FakeConnection()
    MySQLPayrollRepository(FakeConnFactory(conn)).list_for(PayrollFilter(), limit=10)

    sql, params = conn.executed[0]
    assert "WHERE" not in sql
    assert params == (10,)


def test_insert_returns_new_id():
    conn = FakeConnection()

    assert MySQLPayrollRepository(FakeConnFactory(conn)).insert(_new_payroll()) == 17
    assert conn.committed


def test_unique_violation_becomes_duplicate_payroll_error():
    conn = FakeConnection(fail_with=mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY))

    with pytest.raises(DuplicatePayrollError) as exc:
        MySQLPayrollRepository(FakeConnFactory(conn)).insert(_new_payroll())

    assert (exc.value.author_id, exc.value.month, exc.value.year) == (2, 1, 2026)
    assert conn.rolled_back


def test_other_database_errors_propagate():
    conn = FakeConnection(fail_with=mysql.connector.OperationalError(msg="gone away", errno=errorcode.CR_SERVER_GONE_ERROR))

    with pytest.raises(mysql.connector.OperationalError):
        MySQLPayrollRepository(FakeConnFactory(conn)).insert(_new_payroll())
