"""Pure time arithmetic over attendance segments."""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..core.constants import HOURS_QUANTUM
from ..core.enums import SessionState
from .model import Attendance, AttendanceTimestamp


def segment_seconds(ts: AttendanceTimestamp, *, now: Optional[datetime] = None) -> float:
    """Length of a segment in seconds, never negative.

    Open segments count up to ``now``; without ``now`` they count as zero.
    """
    end = ts.end_time if ts.end_time is not None else now
    if end is None:
        return 0.0
    return max((end - ts.start_time).total_seconds(), 0.0)


def total_hours(segments: Iterable[AttendanceTimestamp]) -> Decimal:
    """Sum of closed segments in hours, rounded to 2 decimals."""
    seconds = sum(segment_seconds(ts) for ts in segments if ts.end_time is not None)
    hours = Decimal(repr(seconds)) / Decimal(3600)
    return hours.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def worked_seconds(segments: Iterable[AttendanceTimestamp], *, now: datetime) -> int:
    return int(sum(segment_seconds(ts, now=now) for ts in segments))


def session_state(attendance: Optional[Attendance]) -> SessionState:
    if attendance is None or attendance.clock_in is None:
        return SessionState.NOT_STARTED
    if attendance.open_segment() is not None:
        return SessionState.RUNNING
    last_end = max((ts.end_time for ts in attendance.timestamps if ts.end_time), default=None)
    if attendance.clock_out is not None and (last_end is None or last_end <= attendance.clock_out):
        return SessionState.CLOSED
    return SessionState.PAUSED
