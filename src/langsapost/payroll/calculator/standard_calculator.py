from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from ...articles.model import AuthorPeriodAggregate
from ...core.constants import DEFAULT_TAX_RATE, VIEW_BUCKET_SIZE
from ...core.enums import ComponentKind
from ...users.model import Author
from ..model import PayrollBreakdown, Period, SalaryComponent
from .base import PayrollCalculator

_ZERO = Decimal("0")
_CENT = Decimal("0.01")


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: sum of component contributions, minus a flat tax.

    fixed           -> value
    per_article     -> value * published articles
    per_view_bucket -> value * (views // 1000)

    Several view-bucket components add up into ``view_bonus``.
    """

    def __init__(self, *, tax_rate: Optional[Decimal] = None, bucket_size: int = VIEW_BUCKET_SIZE):
        self._tax_rate = Decimal(str(tax_rate)) if tax_rate is not None else DEFAULT_TAX_RATE
        self._bucket_size = int(bucket_size)

    @property
    def tax_rate(self) -> Decimal:
        return self._tax_rate

    def compute(
        self,
        author: Author,
        period: Period,
        aggregate: AuthorPeriodAggregate,
        components: Sequence[SalaryComponent],
    ) -> PayrollBreakdown:
        article_count = int(aggregate.published_article_count)
        buckets = int(aggregate.total_views) // self._bucket_size

        base = _ZERO
        article_bonus = _ZERO
        view_bonus = _ZERO

        for c in components:
            if c.kind == ComponentKind.FIXED:
                base += c.value
            elif c.kind == ComponentKind.PER_ARTICLE:
                article_bonus += c.value * article_count
            elif c.kind == ComponentKind.PER_VIEW_BUCKET:
                view_bonus += c.value * buckets

        gross = base + article_bonus + view_bonus
        deductions = (gross * self._tax_rate).quantize(_CENT, rounding=ROUND_HALF_UP)
        return PayrollBreakdown(
            article_count=article_count,
            base_salary=base,
            article_bonus=article_bonus,
            view_bonus=view_bonus,
            gross=gross,
            deductions=deductions,
            tax_rate=self._tax_rate,
            total=gross - deductions,
        )
