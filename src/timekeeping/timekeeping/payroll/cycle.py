"""Payroll cycle calendar: 22nd of the previous month to the 21st."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Mapping, Optional, Set

from ..attendance.model import Attendance
from ..common.datetime_utils import iter_days, start_of_day
from ..core.constants import PAYROLL_CYCLE_END_DAY, PAYROLL_CYCLE_START_DAY, SUNDAY
from ..core.enums import DayStatus
from ..leaves.model import LeaveRequest
from .model import PayrollCycle


def payroll_cycle_dates(month: int, year: int) -> PayrollCycle:
    start_month = 12 if month == 1 else month - 1
    start_year = year - 1 if month == 1 else year

    return PayrollCycle(
        month=month,
        year=year,
        start=datetime(start_year, start_month, PAYROLL_CYCLE_START_DAY, 0, 0, 0),
        end=datetime(year, month, PAYROLL_CYCLE_END_DAY, 23, 59, 59, 999000),
    )


def working_days_in_cycle(start: datetime, end: datetime) -> list[datetime]:
    """Every day in ``[start, end]`` except Sundays, at midnight. Saturdays count."""
    return [day for day in iter_days(start, end) if day.weekday() != SUNDAY]


def leave_dates(leaves: Iterable[LeaveRequest]) -> Set[datetime]:
    """Midnights of all non-Sunday days covered by the given leaves."""
    days: Set[datetime] = set()
    for leave in leaves:
        days.update(day for day in iter_days(leave.start_date, leave.end_date) if day.weekday() != SUNDAY)
    return days


def attendance_by_day(rows: Iterable[Attendance]) -> dict[datetime, Attendance]:
    return {start_of_day(row.work_date): row for row in rows}


def classify_day(
    day: datetime,
    *,
    attendance: Mapping[datetime, Attendance],
    on_leave: Set[datetime],
) -> DayStatus:
    """Leave wins over attendance; presence needs a recorded clock-in."""
    if day in on_leave:
        return DayStatus.LEAVE
    record: Optional[Attendance] = attendance.get(day)
    if record is not None and record.clock_in is not None:
        return DayStatus.PRESENT
    return DayStatus.ABSENT
