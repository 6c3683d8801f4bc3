from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Tuple

Clock = Callable[[], datetime]


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/inject a fixed clock easier.
    """
    return datetime.now()


def start_of_day(moment: datetime) -> datetime:
    """Local midnight of the calendar day containing ``moment``."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def day_bounds(moment: datetime) -> Tuple[datetime, datetime]:
    """Half-open ``[start, end)`` range of the calendar day containing ``moment``."""
    start = start_of_day(moment)
    return start, start + timedelta(days=1)
