from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.constants import MAX_PERIOD_YEAR, MIN_PERIOD_YEAR
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def require_month(value: Any) -> int:
    month = require_int(value, "month")
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    return month


def require_year(value: Any) -> int:
    year = require_int(value, "year")
    if not MIN_PERIOD_YEAR <= year <= MAX_PERIOD_YEAR:
        raise ValidationError(f"year must be between {MIN_PERIOD_YEAR} and {MAX_PERIOD_YEAR}")
    return year


def require_non_negative_amount(value: Any, field_name: str) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if amount < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return amount


def require_bool(value: Any, field_name: str) -> bool:
    # JSON true/false, or 0/1
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValidationError(f"{field_name} must be true or false")
