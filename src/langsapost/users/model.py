from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: back-office account.

    Plain data object, no DB access code.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    nik: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class Author:
    """Read-model of an author as needed by payroll (identity printed on the slip)."""

    author_id: int
    name: str
    email: str
    nik: Optional[str] = None
