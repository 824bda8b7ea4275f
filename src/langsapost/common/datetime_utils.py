from __future__ import annotations

from datetime import date, datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_bounds(month: int, year: int) -> tuple[datetime, datetime]:
    """Half-open [start, end) datetimes covering one calendar month."""
    start = datetime(year, month, 1)
    if month == 12:
        end = datetime(year + 1, 1, 1)
    else:
        end = datetime(year, month + 1, 1)
    return start, end


def previous_month(moment: date) -> tuple[int, int]:
    """(month, year) of the calendar month before ``moment``."""
    if moment.month == 1:
        return 12, moment.year - 1
    return moment.month - 1, moment.year
