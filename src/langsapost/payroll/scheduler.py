from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_PAYROLL_RUN_DAY, DEFAULT_PAYROLL_RUN_HOUR
from ..core.enums import RunMode, RunState
from ..core.exceptions import PayrollRunInProgressError
from .model import BatchResult, Period
from .service import PayrollService

logger = logging.getLogger(__name__)


class PayrollScheduler:
    """State machine around the payroll pipeline.

    idle -> running(period) -> completed | partially_failed

    Both the periodic trigger (day ``run_day`` at ``run_hour`` local time,
    previous calendar month) and the manual admin trigger go through
    ``_run``. Only one run at a time per process; the last result is kept.
    """

    def __init__(
        self,
        service: PayrollService,
        *,
        run_day: int = DEFAULT_PAYROLL_RUN_DAY,
        run_hour: int = DEFAULT_PAYROLL_RUN_HOUR,
        clock: Callable[[], datetime] = now_local,
    ):
        if not 1 <= int(run_day) <= 28:
            raise ValueError("run_day must be between 1 and 28")
        if not 0 <= int(run_hour) <= 23:
            raise ValueError("run_hour must be between 0 and 23")

        self._service = service
        self._run_day = int(run_day)
        self._run_hour = int(run_hour)
        self._clock = clock

        self._lock = threading.Lock()
        self._state = RunState.IDLE
        self._current: Optional[Period] = None
        self._last_result: Optional[BatchResult] = None

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def last_result(self) -> Optional[BatchResult]:
        return self._last_result

    def run_periodic(self, now: Optional[datetime] = None) -> BatchResult:
        now = now or self._clock()
        return self._run(Period.previous(now), RunMode.PERIODIC, now)

    def run_manual(self, month, year, now: Optional[datetime] = None) -> BatchResult:
        now = now or self._clock()
        period = Period.of(month, year).ensure_ended(now)
        return self._run(period, RunMode.MANUAL, now)

    def _run(self, period: Period, mode: RunMode, now: datetime) -> BatchResult:
        with self._lock:
            if self._state == RunState.RUNNING:
                raise PayrollRunInProgressError(f"A payroll run for {self._current} is already in progress")
            previous_state = self._state
            self._state = RunState.RUNNING
            self._current = period

        try:
            result = self._service.generate(period, mode, now=now)
        except Exception:
            logger.exception("Payroll run (%s) for %s aborted", mode.value, period)
            with self._lock:
                self._state = previous_state
                self._current = None
            raise

        with self._lock:
            self._last_result = result
            self._state = result.state
            self._current = None
        return result

    def next_fire_time(self, now: Optional[datetime] = None) -> datetime:
        now = now or self._clock()
        candidate = now.replace(day=self._run_day, hour=self._run_hour, minute=0, second=0, microsecond=0)
        if candidate > now:
            return candidate
        if now.month == 12:
            return candidate.replace(year=now.year + 1, month=1)
        return candidate.replace(month=now.month + 1)

    def status(self, now: Optional[datetime] = None) -> dict:
        return {
            # in-process view; worker runs are recorded as payroll.periodic_run activity
            "scope": "process",
            "state": self._state.value,
            "running_period": str(self._current) if self._current else None,
            "last_result": self._last_result.to_dict() if self._last_result else None,
            "next_fire_time": self.next_fire_time(now).isoformat(),
        }
