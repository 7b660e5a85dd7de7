from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def start_of_day(value: date | datetime) -> datetime:
    """Normalize a date or datetime to midnight of the same calendar day."""
    if isinstance(value, datetime):
        return datetime.combine(value.date(), time())
    return datetime.combine(value, time())


def iter_days(start: date | datetime, end: date | datetime) -> Iterator[datetime]:
    """Yield every calendar day from start to end inclusive, at midnight."""
    current = start_of_day(start)
    last = start_of_day(end)
    while current <= last:
        yield current
        current += timedelta(days=1)


def isoformat(value: Optional[date | datetime]) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, datetime):
        value = start_of_day(value)
    return value.isoformat(timespec="milliseconds")
