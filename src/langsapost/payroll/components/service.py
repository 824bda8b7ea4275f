from __future__ import annotations

import logging
from typing import Any, Sequence

from ...common.validators import require_non_empty, require_non_negative_amount
from ...core.enums import ComponentKind
from ...core.exceptions import NotFoundError, ValidationError
from ..model import SalaryComponent
from .repository import SalaryComponentRepository

logger = logging.getLogger(__name__)


def _parse_kind(value: Any) -> ComponentKind:
    try:
        return ComponentKind.parse(str(value or ""))
    except ValueError:
        allowed = ", ".join(k.value for k in ComponentKind)
        raise ValidationError(f"kind must be one of: {allowed}")


class SalaryComponentService:
    """Use case: administer the salary rule set.

    Components are soft-disabled via ``active``; there is no delete, so
    historical payrolls never lose the rules they were computed with.
    """

    def __init__(self, components: SalaryComponentRepository):
        self._components = components

    def list_all(self) -> Sequence[SalaryComponent]:
        return self._components.list_all()

    def get(self, component_id: int) -> SalaryComponent:
        component = self._components.get_by_id(int(component_id))
        if not component:
            raise NotFoundError("Salary component not found")
        return component

    def create(self, *, name: str, kind: Any, value: Any, active: bool = True) -> SalaryComponent:
        name = require_non_empty(name, "name")
        parsed_kind = _parse_kind(kind)
        amount = require_non_negative_amount(value, "value")

        component_id = self._components.create(name=name, kind=parsed_kind, value=amount, active=bool(active))
        logger.info("Salary component %s created (%s, %s)", component_id, parsed_kind.value, amount)
        return self.get(component_id)

    def update(self, *, component_id: int, name: str, kind: Any, value: Any, active: bool) -> SalaryComponent:
        self.get(component_id)
        name = require_non_empty(name, "name")
        parsed_kind = _parse_kind(kind)
        amount = require_non_negative_amount(value, "value")

        self._components.update(
            component_id=int(component_id),
            name=name,
            kind=parsed_kind,
            value=amount,
            active=bool(active),
        )
        logger.info("Salary component %s updated (%s, %s, active=%s)", component_id, parsed_kind.value, amount, bool(active))
        return self.get(component_id)
