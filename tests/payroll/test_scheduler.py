from datetime import datetime

import pytest

from langsapost.core.enums import RunMode, RunState
from langsapost.core.exceptions import PayrollRunInProgressError, ValidationError
from langsapost.payroll.model import Period
from langsapost.payroll.scheduler import PayrollScheduler


def test_manual_rejects_current_and_future_months(world):
    now = datetime(2026, 3, 10, 12, 0)

    for month, year in [(3, 2026), (4, 2026), (1, 2027)]:
        with pytest.raises(ValidationError):
            world.scheduler.run_manual(month, year, now=now)

    assert world.payrolls.rows == {}
    assert world.scheduler.state is RunState.IDLE


def test_manual_run_for_past_month(world):
    result = world.scheduler.run_manual(2, 2026, now=datetime(2026, 3, 10, 12, 0))

    assert result.mode is RunMode.MANUAL
    assert result.period == Period(year=2026, month=2)
    assert world.scheduler.state is RunState.COMPLETED
    assert world.scheduler.last_result is result


def test_periodic_run_in_january_targets_previous_december(world):
    result = world.scheduler.run_periodic(now=datetime(2026, 1, 25, 9, 0))

    assert result.period == Period(year=2025, month=12)
    assert result.mode is RunMode.PERIODIC


def test_run_while_running_is_rejected(world):
    attempts = []

    def generate(period, mode, *, now=None):
        with pytest.raises(PayrollRunInProgressError):
            world.scheduler.run_manual(1, 2026, now=now)
        attempts.append(world.scheduler.state)
        return original(period, mode, now=now)

    original = world.service.generate
    world.service.generate = generate

    world.scheduler.run_periodic(now=datetime(2026, 2, 25, 9, 0))

    assert attempts == [RunState.RUNNING]
    assert world.scheduler.state is RunState.COMPLETED


def test_aborted_run_returns_to_previous_state(world):
    def broken(*args, **kwargs):
        raise RuntimeError("database down")

    world.components.list_active = broken

    with pytest.raises(RuntimeError):
        world.scheduler.run_periodic(now=datetime(2026, 2, 25, 9, 0))
    assert world.scheduler.state is RunState.IDLE


@pytest.mark.parametrize(
    "now, expected",
    [
        (datetime(2026, 3, 10, 12, 0), datetime(2026, 3, 25, 9, 0)),
        (datetime(2026, 3, 25, 8, 59), datetime(2026, 3, 25, 9, 0)),
        (datetime(2026, 3, 25, 9, 0), datetime(2026, 4, 25, 9, 0)),
        (datetime(2026, 12, 31, 23, 0), datetime(2027, 1, 25, 9, 0)),
    ],
)
def test_next_fire_time(world, now, expected):
    assert world.scheduler.next_fire_time(now) == expected


def test_custom_schedule_and_bounds(world):
    scheduler = PayrollScheduler(world.service, run_day=1, run_hour=0)
    assert scheduler.next_fire_time(datetime(2026, 5, 1, 0, 30)) == datetime(2026, 6, 1, 0, 0)

    with pytest.raises(ValueError):
        PayrollScheduler(world.service, run_day=31)


def test_status_reports_last_result(world):
    world.scheduler.run_manual(1, 2026, now=datetime(2026, 3, 10, 12, 0))

    status = world.scheduler.status(datetime(2026, 3, 10, 12, 0))

    assert status["state"] == "completed"
    assert status["last_result"]["summary"]["created"] == 3
    assert status["next_fire_time"] == "2026-03-25T09:00:00"
