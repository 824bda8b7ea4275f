from datetime import datetime
from decimal import Decimal

import pytest

from langsapost.core.enums import OutcomeStatus, Role, RunMode, RunState
from langsapost.core.exceptions import AuthorizationError, DuplicatePayrollError, NotFoundError, RenderError, ValidationError
from langsapost.payroll.document.renderer import PayslipRenderer
from langsapost.payroll.model import Period

from fakes import PayrollWorld, make_user

JAN = Period(year=2026, month=1)
NOW = datetime(2026, 2, 25, 9, 0)


class FailingForAuthor(PayslipRenderer):
    def __init__(self, author_id: int):
        self._author_id = author_id

    def render(self, author, period, breakdown, *, generated_on):
        if author.author_id == self._author_id:
            raise RenderError("font missing")
        return super().render(author, period, breakdown, generated_on=generated_on)


def test_generate_creates_one_row_per_active_author(world):
    world.articles.totals[(2, 1, 2026)] = (3, 2500)

    result = world.service.generate(JAN, RunMode.PERIODIC, now=NOW)

    assert result.state is RunState.COMPLETED
    assert [o.author_id for o in result.created] == [1, 2, 3]
    budi = result.created[1]
    assert budi.total == Decimal("3011500")
    assert budi.document_ref in world.storage.files
    assert world.payrolls.get_by_id(budi.payroll_id).total == Decimal("3011500")


def test_generate_twice_is_idempotent(world):
    world.service.generate(JAN, RunMode.MANUAL, now=NOW)
    second = world.service.generate(JAN, RunMode.MANUAL, now=NOW)

    assert len(world.payrolls.rows) == 3
    assert second.created == []
    assert {o.status for o in second.skipped} == {OutcomeStatus.SKIPPED}
    assert len(second.skipped) == 3


def test_five_authors_one_existing_entry():
    world = PayrollWorld([make_user(i, f"Author {i}") for i in range(1, 6)])
    world.service.generate_for_author(4, JAN, now=NOW)

    result = world.service.generate(JAN, RunMode.PERIODIC, now=NOW)

    assert (len(result.created), len(result.skipped), len(result.failed)) == (4, 1, 0)
    assert result.skipped[0].author_id == 4


def test_inactive_authors_are_not_paid(admin, writers, inactive):
    world = PayrollWorld([admin, *writers, inactive])

    result = world.service.generate(JAN, RunMode.PERIODIC, now=NOW)

    assert inactive.user_id not in [o.author_id for o in result.created]


def test_render_failure_does_not_stop_other_authors(admin, writers):
    world = PayrollWorld([admin, *writers], renderer=FailingForAuthor(2))

    result = world.service.generate(JAN, RunMode.PERIODIC, now=NOW)

    assert result.state is RunState.PARTIALLY_FAILED
    assert [o.author_id for o in result.failed] == [2]
    assert "font missing" in result.failed[0].error
    assert [o.author_id for o in result.created] == [1, 3]
    assert not world.payrolls.exists(2, 1, 2026)


def test_duplicate_at_insert_is_skipped_and_artifact_removed(world):
    # another writer recorded the row between exists() and insert()
    world.payrolls.exists = lambda *args: False
    world.service.generate(JAN, RunMode.PERIODIC, now=NOW)
    first_refs = set(world.storage.files)

    result = world.service.generate(JAN, RunMode.PERIODIC, now=NOW)

    assert len(result.skipped) == 3
    assert set(world.storage.files) == first_refs
    assert len(world.storage.deleted) == 3


def test_generate_for_author_rejects_existing_entry(world):
    payroll = world.service.generate_for_author(2, JAN, now=NOW)
    assert payroll.author_name == "Budi Santoso"

    with pytest.raises(DuplicatePayrollError):
        world.service.generate_for_author(2, JAN, now=NOW)


def test_generate_for_author_only_for_ended_months(world):
    with pytest.raises(ValidationError):
        world.service.generate_for_author(2, Period(year=2026, month=2), now=datetime(2026, 2, 28, 23, 59))
    with pytest.raises(ValidationError):
        world.service.generate_for_author(2, Period(year=2026, month=4), now=NOW)

    assert world.payrolls.rows == {}


def test_generate_for_unknown_author(world):
    with pytest.raises(NotFoundError):
        world.service.generate_for_author(99, JAN, now=NOW)


def test_list_is_scoped_to_own_rows_for_writers(world):
    world.service.generate(JAN, RunMode.PERIODIC, now=NOW)

    own = world.service.list_for_user(user_id=3, role=Role.WRITER, author_id=2)
    everyone = world.service.list_for_user(user_id=1, role=Role.ADMIN)
    filtered = world.service.list_for_user(user_id=1, role=Role.ADMIN, author_id=2, month=1, year=2026)

    assert [p.author_id for p in own] == [3]
    assert [p.author_id for p in everyone] == [1, 2, 3]
    assert [p.author_id for p in filtered] == [2]


def test_download_checks_ownership(world):
    payroll = world.service.generate_for_author(2, JAN, now=NOW)

    data, filename = world.service.download(payroll.payroll_id, user_id=2, role=Role.WRITER)
    assert data.startswith(b"%PDF")
    assert filename == "slip_gaji_Budi Santoso_2026_1.pdf"

    with pytest.raises(AuthorizationError):
        world.service.download(payroll.payroll_id, user_id=3, role=Role.WRITER)

    admin_data, _ = world.service.download(payroll.payroll_id, user_id=1, role=Role.ADMIN)
    assert admin_data == data


def test_download_missing_artifact(world):
    payroll = world.service.generate_for_author(2, JAN, now=NOW)
    world.storage.files.clear()

    with pytest.raises(NotFoundError):
        world.service.download(payroll.payroll_id, user_id=1, role=Role.ADMIN)
