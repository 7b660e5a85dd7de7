from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_int
from ..core.enums import ApprovalStatus, Role
from ..core.exceptions import AuthorizationError, InvalidStateError, NotFoundError
from ..employees.model import Employee, User
from ..employees.service import EmployeeDirectory
from .hours import session_state, worked_seconds
from .model import Attendance, ClockOutResult, TodaySession
from .repository import AttendanceRepository
from .scope import scope_filter

logger = logging.getLogger(__name__)


class AttendanceService:
    """Daily clock-in / pause / resume / clock-out lifecycle and approvals.

    Pausing while paused and resuming while running are no-ops, not errors.
    All methods take an optional ``now`` so callers and tests control time;
    the work date is always ``now``'s calendar day.
    """

    def __init__(self, attendance: AttendanceRepository, directory: EmployeeDirectory):
        self._attendance = attendance
        self._directory = directory

    def _today_row(self, employee: Employee, now: datetime) -> Attendance:
        record = self._attendance.get_for_employee_and_date(employee.employee_id, now.date())
        if not record:
            raise NotFoundError("No active attendance")
        return record

    @staticmethod
    def _ensure_workable(record: Attendance) -> None:
        if record.status.locks_day:
            raise InvalidStateError(f"Attendance is {record.status.value}, the day can no longer change")

    def _reload(self, attendance_id: int) -> Attendance:
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise NotFoundError("Attendance not found")
        return record

    def clock_in(self, employee_ref: Any, *, now: Optional[datetime] = None) -> Attendance:
        now = now or now_local()
        employee = self._directory.resolve(employee_ref)

        existing = self._attendance.get_for_employee_and_date(employee.employee_id, now.date())
        if existing:
            self._ensure_workable(existing)

        attendance_id = self._attendance.attach_clock_in(
            employee_id=employee.employee_id,
            work_date=now.date(),
            clock_in=now,
        )
        record = self._reload(attendance_id)

        if record.open_segment() is None and self._attendance.open_segment(attendance_id=attendance_id, start_time=now):
            logger.info("Employee %s clocked in (attendance %s)", employee.employee_id, attendance_id)
            record = self._reload(attendance_id)
        else:
            logger.debug("Employee %s already running, clock-in ignored", employee.employee_id)
        return record

    def pause(self, employee_ref: Any, *, now: Optional[datetime] = None) -> Attendance:
        now = now or now_local()
        employee = self._directory.resolve(employee_ref)
        record = self._today_row(employee, now)

        if self._attendance.close_open_segment(attendance_id=record.attendance_id, end_time=now):
            logger.info("Employee %s paused (attendance %s)", employee.employee_id, record.attendance_id)
            record = self._reload(record.attendance_id)
        else:
            logger.debug("Employee %s has no running segment, pause ignored", employee.employee_id)
        return record

    def resume(self, employee_ref: Any, *, now: Optional[datetime] = None) -> Attendance:
        now = now or now_local()
        employee = self._directory.resolve(employee_ref)
        record = self._today_row(employee, now)
        self._ensure_workable(record)

        if record.open_segment() is None and self._attendance.open_segment(
            attendance_id=record.attendance_id, start_time=now
        ):
            logger.info("Employee %s resumed (attendance %s)", employee.employee_id, record.attendance_id)
            record = self._reload(record.attendance_id)
        else:
            logger.debug("Employee %s already running, resume ignored", employee.employee_id)
        return record

    def clock_out(self, employee_ref: Any, *, now: Optional[datetime] = None) -> ClockOutResult:
        now = now or now_local()
        employee = self._directory.resolve(employee_ref)
        record = self._today_row(employee, now)
        self._ensure_workable(record)

        manager = self._directory.get_manager(employee)
        closed = self._attendance.close_day(
            attendance_id=record.attendance_id,
            clock_out=now,
            approver_id=manager.user_id if manager else None,
            submitted_at=now if manager else None,
        )
        if not closed:
            raise InvalidStateError("Attendance was submitted in the meantime")
        record = self._reload(record.attendance_id)

        logger.info(
            "Employee %s clocked out: %s h (attendance %s, auto-submitted=%s)",
            employee.employee_id,
            record.total_hours,
            record.attendance_id,
            bool(manager),
        )
        return ClockOutResult(
            attendance=record,
            has_manager=manager is not None,
            manager_id=manager.user_id if manager else None,
        )

    def submit_for_approval(
        self,
        employee_ref: Any,
        approver_user_id: Any,
        *,
        now: Optional[datetime] = None,
    ) -> Attendance:
        """Hand today's row to an explicitly chosen approver (employees without a manager)."""
        now = now or now_local()
        approver_id = require_int(approver_user_id, "approverUserId")
        employee = self._directory.resolve(employee_ref)

        record = self._attendance.get_for_employee_and_date(employee.employee_id, now.date())
        if not record:
            raise NotFoundError("No attendance to submit")
        self._ensure_workable(record)
        if record.clock_out is None or record.open_segment() is not None:
            raise InvalidStateError("Clock out before submitting for approval")
        approver = self._directory.get_user(approver_id)

        if not self._attendance.submit(
            attendance_id=record.attendance_id,
            approver_id=approver.user_id,
            submitted_at=now,
        ):
            raise InvalidStateError("Attendance can no longer be submitted")
        logger.info("Attendance %s submitted to user %s", record.attendance_id, approver.user_id)
        return self._reload(record.attendance_id)

    def _decide(
        self,
        attendance_id: Any,
        *,
        acting_user: User,
        status: ApprovalStatus,
        approved_at: Optional[datetime],
    ) -> Attendance:
        record = self._reload(require_int(attendance_id, "attendanceId"))

        if not acting_user.role.is_admin and record.approver_id != acting_user.user_id:
            raise AuthorizationError("Only the designated approver or an admin can decide this attendance")
        if record.status != ApprovalStatus.SUBMITTED:
            raise InvalidStateError(f"Attendance is {record.status.value}, expected submitted")

        if not self._attendance.decide(attendance_id=record.attendance_id, status=status, approved_at=approved_at):
            raise InvalidStateError("Attendance was already decided")

        logger.info("Attendance %s %s by user %s", record.attendance_id, status.value, acting_user.user_id)
        return self._reload(record.attendance_id)

    def approve(self, attendance_id: Any, *, acting_user: User, now: Optional[datetime] = None) -> Attendance:
        return self._decide(
            attendance_id,
            acting_user=acting_user,
            status=ApprovalStatus.APPROVED,
            approved_at=now or now_local(),
        )

    def reject(self, attendance_id: Any, *, acting_user: User) -> Attendance:
        return self._decide(attendance_id, acting_user=acting_user, status=ApprovalStatus.REJECTED, approved_at=None)

    def list_for_employee(self, employee_ref: Any) -> Sequence[Attendance]:
        employee = self._directory.resolve(employee_ref)
        return self._attendance.list_for_employee(employee.employee_id)

    def list_pending_approvals(self, approver_user_id: Any) -> Sequence[Attendance]:
        approver_id = require_int(approver_user_id, "approverId")
        return self._attendance.list_for_approver(approver_id=approver_id, status=ApprovalStatus.SUBMITTED)

    def list_approved(self, requesting_user: User) -> Sequence[Attendance]:
        own = self._directory.employee_for_user(requesting_user.user_id)
        reports = self._directory.direct_report_ids(requesting_user.user_id) if requesting_user.role == Role.MANAGER else ()
        scope = scope_filter(
            requesting_user,
            own_employee_id=own.employee_id if own else None,
            direct_report_ids=reports,
        )
        return self._attendance.list_by_status(status=ApprovalStatus.APPROVED, scope=scope)

    def today(self, employee_ref: Any, *, now: Optional[datetime] = None) -> TodaySession:
        now = now or now_local()
        employee = self._directory.resolve(employee_ref)
        record = self._attendance.get_for_employee_and_date(employee.employee_id, now.date())
        return TodaySession(
            state=session_state(record),
            worked_seconds=worked_seconds(record.timestamps, now=now) if record else 0,
            attendance=record,
        )
