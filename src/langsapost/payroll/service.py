from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..articles.repository import ArticleRepository
from ..common.datetime_utils import now_local
from ..core.enums import OutcomeStatus, Role, RunMode
from ..core.exceptions import AuthorizationError, DuplicatePayrollError, NotFoundError
from ..users.model import Author
from ..users.repository import UserRepository
from .calculator.base import PayrollCalculator
from .components.repository import SalaryComponentRepository
from .document.renderer import PayslipRenderer
from .ledger.ledger import PayrollLedger
from .model import AuthorOutcome, BatchResult, NewPayroll, Payroll, PayrollFilter, Period, SalaryComponent
from .storage import DocumentStorage, payslip_filename

logger = logging.getLogger(__name__)


class PayrollService:
    """Payroll pipeline shared by the periodic and manual triggers.

    Per author: skip if already in the ledger, aggregate the month's
    published articles, compute, render, store the artifact, record.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        articles: ArticleRepository,
        components: SalaryComponentRepository,
        calculator: PayrollCalculator,
        renderer: PayslipRenderer,
        storage: DocumentStorage,
        ledger: PayrollLedger,
        clock: Callable[[], datetime] = now_local,
    ):
        self._users = users
        self._articles = articles
        self._components = components
        self._calculator = calculator
        self._renderer = renderer
        self._storage = storage
        self._ledger = ledger
        self._clock = clock

    def generate(self, period: Period, mode: RunMode, *, now: Optional[datetime] = None) -> BatchResult:
        now = now or self._clock()
        result = BatchResult(period=period, mode=mode, started_at=now)

        components = list(self._components.list_active())
        authors = sorted(self._users.list_active_authors(), key=lambda a: a.author_id)
        logger.info(
            "Payroll run (%s) for %s started: %d authors, %d active components",
            mode.value,
            period,
            len(authors),
            len(components),
        )

        for author in authors:
            result.add(self._sweep_one(author, period, components, now))

        result.finish(self._clock())
        logger.info(
            "Payroll run (%s) for %s %s: created=%d skipped=%d failed=%d",
            mode.value,
            period,
            result.state.value,
            len(result.created),
            len(result.skipped),
            len(result.failed),
        )
        return result

    def _sweep_one(
        self, author: Author, period: Period, components: Sequence[SalaryComponent], now: datetime
    ) -> AuthorOutcome:
        try:
            if self._ledger.exists(author.author_id, period.month, period.year):
                logger.info("Payroll for author %s in %s already exists, skipped", author.author_id, period)
                return AuthorOutcome(author.author_id, author.name, OutcomeStatus.SKIPPED)
            return self._generate_one(author, period, components, now)
        except DuplicatePayrollError:
            logger.info("Payroll for author %s in %s recorded concurrently, skipped", author.author_id, period)
            return AuthorOutcome(author.author_id, author.name, OutcomeStatus.SKIPPED)
        except Exception as e:
            logger.exception("Payroll for author %s in %s failed", author.author_id, period)
            return AuthorOutcome(author.author_id, author.name, OutcomeStatus.FAILED, error=str(e))

    def _generate_one(
        self, author: Author, period: Period, components: Sequence[SalaryComponent], now: datetime
    ) -> AuthorOutcome:
        aggregate = self._articles.aggregate_for_author(author.author_id, period.month, period.year)
        breakdown = self._calculator.compute(author, period, aggregate, components)
        pdf = self._renderer.render(author, period, breakdown, generated_on=now.date())
        ref = self._storage.save(payslip_filename(author.author_id, period), pdf)

        try:
            payroll_id = self._ledger.record(
                NewPayroll(author_id=author.author_id, period=period, breakdown=breakdown, document_ref=ref)
            )
        except Exception:
            # the artifact is orphaned without its ledger row
            self._storage.delete(ref)
            raise

        logger.info("Payroll %s created for author %s in %s: total %s", payroll_id, author.author_id, period, breakdown.total)
        return AuthorOutcome(
            author_id=author.author_id,
            author_name=author.name,
            status=OutcomeStatus.CREATED,
            payroll_id=payroll_id,
            total=breakdown.total,
            document_ref=ref,
        )

    def generate_for_author(self, author_id: int, period: Period, *, now: Optional[datetime] = None) -> Payroll:
        """Generate a single author's payroll; an existing entry is an error here."""
        now = now or self._clock()
        period.ensure_ended(now)

        user = self._users.get_by_id(int(author_id))
        if not user or not user.is_active:
            raise NotFoundError("Author not found")
        if self._ledger.exists(user.user_id, period.month, period.year):
            raise DuplicatePayrollError(user.user_id, period.month, period.year)

        author = Author(author_id=user.user_id, name=user.name, email=user.email, nik=user.nik)
        outcome = self._generate_one(author, period, list(self._components.list_active()), now)
        return self._ledger.get(outcome.payroll_id)

    def list_for_user(
        self,
        *,
        user_id: int,
        role: Optional[Role],
        author_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[Payroll]:
        # non-admins only ever see their own rows
        if role != Role.ADMIN:
            author_id = int(user_id)
        return self._ledger.list_for(PayrollFilter(author_id=author_id, month=month, year=year))

    def download(self, payroll_id: int, *, user_id: int, role: Optional[Role]) -> tuple[bytes, str]:
        payroll = self._ledger.get(payroll_id)
        if role != Role.ADMIN and payroll.author_id != int(user_id):
            raise AuthorizationError("Access denied")

        data = self._ledger.fetch_document(payroll.payroll_id)
        name = payroll.author_name or str(payroll.author_id)
        return data, f"slip_gaji_{name}_{payroll.year}_{payroll.month}.pdf"
