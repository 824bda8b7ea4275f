from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from werkzeug.security import generate_password_hash

from langsapost.activity.service import ActivityLogService
from langsapost.articles.model import AuthorPeriodAggregate
from langsapost.container import Container
from langsapost.core.enums import ComponentKind, Role
from langsapost.core.exceptions import DuplicatePayrollError, NotFoundError
from langsapost.payroll.calculator.standard_calculator import StandardPayrollCalculator
from langsapost.payroll.components.service import SalaryComponentService
from langsapost.payroll.document.renderer import PayslipRenderer
from langsapost.payroll.ledger.ledger import PayrollLedger
from langsapost.payroll.model import Payroll, SalaryComponent
from langsapost.payroll.scheduler import PayrollScheduler
from langsapost.payroll.service import PayrollService
from langsapost.users.model import Author, User
from langsapost.users.service import AuthService

PASSWORD = "secret123"


class InMemoryUsers:
    def __init__(self, users: list[User]):
        self.users = {u.user_id: u for u in users}

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def list_active_authors(self):
        return [
            Author(author_id=u.user_id, name=u.name, email=u.email, nik=u.nik)
            for u in sorted(self.users.values(), key=lambda u: u.user_id)
            if u.is_active
        ]


class InMemoryArticles:
    def __init__(self, totals: Optional[dict] = None):
        # (author_id, month, year) -> (published_article_count, total_views)
        self.totals = totals or {}

    def aggregate_for_author(self, author_id: int, month: int, year: int) -> AuthorPeriodAggregate:
        count, views = self.totals.get((author_id, month, year), (0, 0))
        return AuthorPeriodAggregate(author_id, month, year, published_article_count=count, total_views=views)


class InMemoryComponents:
    def __init__(self, components: Optional[list[SalaryComponent]] = None):
        self.components = {c.component_id: c for c in components or []}

    def list_active(self):
        return [c for _, c in sorted(self.components.items()) if c.active]

    def list_all(self):
        return [c for _, c in sorted(self.components.items())]

    def get_by_id(self, component_id: int):
        return self.components.get(component_id)

    def create(self, *, name, kind, value, active) -> int:
        new_id = max(self.components, default=0) + 1
        self.components[new_id] = SalaryComponent(new_id, name, kind, value, active)
        return new_id

    def update(self, *, component_id, name, kind, value, active) -> bool:
        self.components[component_id] = SalaryComponent(component_id, name, kind, value, active)
        return True


class InMemoryPayrolls:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.rows: dict[int, Payroll] = {}

    def exists(self, author_id: int, month: int, year: int) -> bool:
        return self._has(author_id, month, year)

    def _has(self, author_id: int, month: int, year: int) -> bool:
        return any(p.author_id == author_id and p.month == month and p.year == year for p in self.rows.values())

    def insert(self, payroll) -> int:
        if self._has(payroll.author_id, payroll.period.month, payroll.period.year):
            raise DuplicatePayrollError(payroll.author_id, payroll.period.month, payroll.period.year)
        b = payroll.breakdown
        user = self._users.get_by_id(payroll.author_id)
        new_id = len(self.rows) + 1
        self.rows[new_id] = Payroll(
            payroll_id=new_id,
            author_id=payroll.author_id,
            month=payroll.period.month,
            year=payroll.period.year,
            article_count=b.article_count,
            article_bonus=b.article_bonus,
            view_bonus=b.view_bonus,
            gross=b.gross,
            deductions=b.deductions,
            total=b.total,
            document_ref=payroll.document_ref,
            created_at=datetime(2026, 1, 25, 9, 0),
            author_name=user.name if user else None,
            author_email=user.email if user else None,
        )
        return new_id

    def list_for(self, flt, *, limit: int):
        rows = [
            p
            for p in self.rows.values()
            if (flt.author_id is None or p.author_id == flt.author_id)
            and (flt.month is None or p.month == flt.month)
            and (flt.year is None or p.year == flt.year)
        ]
        rows.sort(key=lambda p: (-p.year, -p.month, p.author_id))
        return rows[:limit]

    def get_by_id(self, payroll_id: int):
        return self.rows.get(payroll_id)


class InMemoryStorage:
    def __init__(self):
        self.files: dict[str, bytes] = {}
        self.deleted: list[str] = []

    def save(self, filename: str, data: bytes) -> str:
        self.files[filename] = data
        return filename

    def load(self, ref: str) -> bytes:
        if ref not in self.files:
            raise NotFoundError("Payslip document not found")
        return self.files[ref]

    def delete(self, ref: str) -> None:
        self.files.pop(ref, None)
        self.deleted.append(ref)


class InMemoryActivityLogs:
    def __init__(self):
        self.entries: list[dict] = []

    def record(self, *, user_id, action, meta_json, ip_address) -> int:
        self.entries.append({"user_id": user_id, "action": action, "meta_json": meta_json, "ip_address": ip_address})
        return len(self.entries)


def make_user(user_id: int, name: str, role: Role = Role.WRITER, *, active: bool = True, nik: Optional[str] = None) -> User:
    return User(
        user_id=user_id,
        name=name,
        email=f"{name.lower().replace(' ', '.')}@langsapost.test",
        password_hash=generate_password_hash(PASSWORD),
        role=role,
        nik=nik,
        is_active=active,
    )


def default_components() -> list[SalaryComponent]:
    return [
        SalaryComponent(1, "Gaji Pokok", ComponentKind.FIXED, Decimal("3000000")),
        SalaryComponent(2, "Bonus Per Artikel", ComponentKind.PER_ARTICLE, Decimal("50000")),
        SalaryComponent(3, "Bonus Views (per 1000)", ComponentKind.PER_VIEW_BUCKET, Decimal("10000")),
    ]


class PayrollWorld:
    """All fakes wired into the real services."""

    def __init__(self, users: list[User], *, totals: Optional[dict] = None, components=None, renderer=None, storage=None):
        self.now = datetime(2026, 3, 10, 12, 0)
        self.users = InMemoryUsers(users)
        self.articles = InMemoryArticles(totals)
        self.components = InMemoryComponents(default_components() if components is None else components)
        self.payrolls = InMemoryPayrolls(self.users)
        self.storage = storage or InMemoryStorage()
        self.activity = InMemoryActivityLogs()
        self.ledger = PayrollLedger(self.payrolls, self.storage)
        self.service = PayrollService(
            users=self.users,
            articles=self.articles,
            components=self.components,
            calculator=StandardPayrollCalculator(tax_rate=Decimal("0.05")),
            renderer=renderer or PayslipRenderer(),
            storage=self.storage,
            ledger=self.ledger,
            clock=self.clock,
        )
        self.scheduler = PayrollScheduler(self.service, clock=self.clock)

    def clock(self) -> datetime:
        return self.now

    def container(self) -> Container:
        return Container(
            conn=None,
            auth_service=AuthService(self.users),
            component_service=SalaryComponentService(self.components),
            payroll_service=self.service,
            payroll_scheduler=self.scheduler,
            activity_service=ActivityLogService(self.activity),
        )


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = 17

    def execute(self, sql, params=()):
        self._conn.executed.append((" ".join(sql.split()), params))
        if self._conn.fail_with is not None:
            raise self._conn.fail_with

    def fetchall(self):
        return self._conn.rows

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def close(self):
        pass


class FakeConnection:
    def __init__(self, rows=None, fail_with=None):
        self.rows = rows or []
        self.fail_with = fail_with
        self.executed = []
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, conn):
        self._conn = conn

    def connect(self):
        return self._conn
