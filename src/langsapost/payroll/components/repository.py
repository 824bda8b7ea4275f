from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ...core.enums import ComponentKind
from ..model import SalaryComponent


class SalaryComponentRepository(Protocol):
    def list_active(self) -> Sequence[SalaryComponent]:
        """Active components ordered by ascending id."""

        raise NotImplementedError

    def list_all(self) -> Sequence[SalaryComponent]:
        raise NotImplementedError

    def get_by_id(self, component_id: int) -> Optional[SalaryComponent]:
        raise NotImplementedError

    def create(self, *, name: str, kind: ComponentKind, value: Decimal, active: bool) -> int:
        raise NotImplementedError

    def update(self, *, component_id: int, name: str, kind: ComponentKind, value: Decimal, active: bool) -> bool:
        raise NotImplementedError
