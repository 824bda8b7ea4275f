from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import previous_month
from ..common.validators import require_month, require_year
from ..core.enums import ComponentKind, OutcomeStatus, RunMode, RunState
from ..core.exceptions import ValidationError


@dataclass(frozen=True, order=True)
class Period:
    """One payroll cycle: a calendar (month, year)."""

    year: int
    month: int

    @classmethod
    def of(cls, month, year) -> "Period":
        return cls(year=require_year(year), month=require_month(month))

    @classmethod
    def previous(cls, moment: date) -> "Period":
        month, year = previous_month(moment)
        return cls(year=year, month=month)

    @classmethod
    def containing(cls, moment: date) -> "Period":
        return cls(year=moment.year, month=moment.month)

    def ensure_ended(self, now: date) -> "Period":
        """Manual generation is only allowed once the month is over."""
        if self >= Period.containing(now):
            raise ValidationError("Payroll can only be generated for a month that has already ended")
        return self

    def __str__(self) -> str:
        return f"{self.year}-{self.month:02d}"


@dataclass(frozen=True)
class SalaryComponent:
    """Configurable salary rule. Soft-disabled through ``active``."""

    component_id: int
    name: str
    kind: ComponentKind
    value: Decimal
    active: bool = True
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.component_id,
            "name": self.name,
            "kind": self.kind.value,
            "value": str(self.value),
            "active": self.active,
        }


@dataclass(frozen=True)
class PayrollBreakdown:
    article_count: int
    base_salary: Decimal
    article_bonus: Decimal
    view_bonus: Decimal
    gross: Decimal
    deductions: Decimal
    tax_rate: Decimal
    total: Decimal


@dataclass(frozen=True)
class NewPayroll:
    """A computed payroll about to be written to the ledger."""

    author_id: int
    period: Period
    breakdown: PayrollBreakdown
    document_ref: str


@dataclass(frozen=True)
class Payroll:
    """Ledger entry. Never mutated after insert."""

    payroll_id: int
    author_id: int
    month: int
    year: int
    article_count: int
    article_bonus: Decimal
    view_bonus: Decimal
    gross: Decimal
    deductions: Decimal
    total: Decimal
    document_ref: Optional[str]
    created_at: Optional[datetime] = None
    author_name: Optional[str] = None
    author_email: Optional[str] = None

    @property
    def period(self) -> Period:
        return Period(year=self.year, month=self.month)

    def to_dict(self) -> dict:
        return {
            "id": self.payroll_id,
            "author_id": self.author_id,
            "author_name": self.author_name,
            "author_email": self.author_email,
            "month": self.month,
            "year": self.year,
            "article_count": self.article_count,
            "article_bonus": str(self.article_bonus),
            "view_bonus": str(self.view_bonus),
            "gross": str(self.gross),
            "deductions": str(self.deductions),
            "total": str(self.total),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class PayrollFilter:
    """Optional equality filters for ledger listing. ``None`` means 'any'."""

    author_id: Optional[int] = None
    month: Optional[int] = None
    year: Optional[int] = None


@dataclass(frozen=True)
class AuthorOutcome:
    author_id: int
    author_name: str
    status: OutcomeStatus
    payroll_id: Optional[int] = None
    total: Optional[Decimal] = None
    document_ref: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        data["total"] = str(self.total) if self.total is not None else None
        return data


@dataclass
class BatchResult:
    period: Period
    mode: RunMode
    state: RunState = RunState.RUNNING
    created: list[AuthorOutcome] = field(default_factory=list)
    skipped: list[AuthorOutcome] = field(default_factory=list)
    failed: list[AuthorOutcome] = field(default_factory=list)
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    def add(self, outcome: AuthorOutcome) -> None:
        {
            OutcomeStatus.CREATED: self.created,
            OutcomeStatus.SKIPPED: self.skipped,
            OutcomeStatus.FAILED: self.failed,
        }[outcome.status].append(outcome)

    def finish(self, finished_at: datetime) -> None:
        self.finished_at = finished_at
        self.state = RunState.PARTIALLY_FAILED if self.failed else RunState.COMPLETED

    def to_dict(self) -> dict:
        return {
            "month": self.period.month,
            "year": self.period.year,
            "mode": self.mode.value,
            "state": self.state.value,
            "created": [o.to_dict() for o in self.created],
            "skipped": [o.to_dict() for o in self.skipped],
            "failed": [o.to_dict() for o in self.failed],
            "summary": {
                "created": len(self.created),
                "skipped": len(self.skipped),
                "failed": len(self.failed),
            },
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
        }
