from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..model import NewPayroll, Payroll, PayrollFilter


class PayrollRepository(Protocol):
    """Append-only store of payroll rows, unique per (author, month, year)."""

    def exists(self, author_id: int, month: int, year: int) -> bool:
        raise NotImplementedError

    def insert(self, payroll: NewPayroll) -> int:
        """Raises DuplicatePayrollError on a unique-key violation."""

        raise NotImplementedError

    def list_for(self, flt: PayrollFilter, *, limit: int) -> Sequence[Payroll]:
        raise NotImplementedError

    def get_by_id(self, payroll_id: int) -> Optional[Payroll]:
        raise NotImplementedError
