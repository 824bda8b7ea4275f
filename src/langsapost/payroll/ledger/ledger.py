from __future__ import annotations

from typing import Sequence

from ...core.constants import DEFAULT_PAYROLL_LIST_LIMIT
from ...core.exceptions import NotFoundError
from ..model import NewPayroll, Payroll, PayrollFilter
from ..storage import DocumentStorage
from .repository import PayrollRepository


class PayrollLedger:
    """Durable record of generated payrolls and their payslip artifacts."""

    def __init__(self, payrolls: PayrollRepository, storage: DocumentStorage):
        self._payrolls = payrolls
        self._storage = storage

    def exists(self, author_id: int, month: int, year: int) -> bool:
        return self._payrolls.exists(int(author_id), int(month), int(year))

    def record(self, payroll: NewPayroll) -> int:
        return self._payrolls.insert(payroll)

    def list_for(self, flt: PayrollFilter, *, limit: int = DEFAULT_PAYROLL_LIST_LIMIT) -> Sequence[Payroll]:
        return self._payrolls.list_for(flt, limit=limit)

    def get(self, payroll_id: int) -> Payroll:
        payroll = self._payrolls.get_by_id(int(payroll_id))
        if not payroll:
            raise NotFoundError("Payroll not found")
        return payroll

    def fetch_document(self, payroll_id: int) -> bytes:
        payroll = self.get(payroll_id)
        if not payroll.document_ref:
            raise NotFoundError("Payslip document not found")
        return self._storage.load(payroll.document_ref)
