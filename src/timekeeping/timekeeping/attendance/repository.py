from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ApprovalStatus
from .model import Attendance
from .scope import AttendanceScope


class AttendanceRepository(Protocol):
    """Attendance rows and their timestamp segments.

    Every method is its own transaction. Rows are returned with their
    segments ordered by start time.
    """

    def get_by_id(self, attendance_id: int) -> Optional[Attendance]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[Attendance]:
        raise NotImplementedError

    def attach_clock_in(self, *, employee_id: int, work_date: date, clock_in: datetime) -> int:
        """Find-or-create the day's row and set ``clock_in`` if still empty.

        Safe under concurrent first clock-ins: callers racing on the same
        (employee, day) all get the id of the single row.
        """

        raise NotImplementedError

    def open_segment(self, *, attendance_id: int, start_time: datetime) -> bool:
        """Open a new segment. Returns False if one is already open."""

        raise NotImplementedError

    def close_open_segment(self, *, attendance_id: int, end_time: datetime) -> bool:
        """Close the running segment, if any. Returns False when none was open."""

        raise NotImplementedError

    def close_day(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        approver_id: Optional[int] = None,
        submitted_at: Optional[datetime] = None,
    ) -> bool:
        """Atomically close the open segment, recompute ``total_hours`` and
        set ``clock_out``; with an approver also submit the row.

        Returns False, changing nothing, when the row is submitted or approved.
        """

        raise NotImplementedError

    def submit(self, *, attendance_id: int, approver_id: int, submitted_at: datetime) -> bool:
        """Submit a clocked-out day with no running segment whose status is
        none or rejected. False otherwise."""

        raise NotImplementedError

    def decide(self, *, attendance_id: int, status: ApprovalStatus, approved_at: Optional[datetime]) -> bool:
        """Move a ``submitted`` row to approved/rejected. False if not submitted."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[Attendance]:
        """Newest work date first."""

        raise NotImplementedError

    def list_for_approver(self, *, approver_id: int, status: ApprovalStatus) -> Sequence[Attendance]:
        raise NotImplementedError

    def list_by_status(self, *, status: ApprovalStatus, scope: AttendanceScope) -> Sequence[Attendance]:
        raise NotImplementedError

    def list_in_range(self, *, employee_id: int, start_date: date, end_date: date) -> Sequence[Attendance]:
        """Rows with ``start_date <= work_date <= end_date``, oldest first."""

        raise NotImplementedError
