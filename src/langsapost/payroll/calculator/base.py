from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...articles.model import AuthorPeriodAggregate
from ...users.model import Author
from ..model import PayrollBreakdown, Period, SalaryComponent


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(
        self,
        author: Author,
        period: Period,
        aggregate: AuthorPeriodAggregate,
        components: Sequence[SalaryComponent],
    ) -> PayrollBreakdown:
        raise NotImplementedError
