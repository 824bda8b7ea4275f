from __future__ import annotations

from dataclasses import replace

import pytest

from langsapost.core.enums import Role
from langsapost.users.model import User

from fakes import PayrollWorld, make_user


@pytest.fixture
def admin() -> User:
    return make_user(1, "Admin User", Role.ADMIN, nik="ADM001")


@pytest.fixture
def writers() -> list[User]:
    return [
        make_user(2, "Budi Santoso", nik="1171000000000002"),
        make_user(3, "Sari Dewi"),
    ]


@pytest.fixture
def world(admin, writers) -> PayrollWorld:
    return PayrollWorld([admin, *writers])


@pytest.fixture
def inactive(writers):
    return replace(writers[0], user_id=9, email="gone@langsapost.test", is_active=False)
