from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Tuple

from ..common.datetime_utils import isoformat
from ..core.enums import ApprovalStatus, SessionState


@dataclass(frozen=True)
class AttendanceTimestamp:
    """One work segment. ``end_time`` is None while the segment is running."""

    timestamp_id: int
    attendance_id: int
    start_time: datetime
    end_time: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def to_dict(self) -> dict:
        return {
            "id": self.timestamp_id,
            "attendanceId": self.attendance_id,
            "startTime": isoformat(self.start_time),
            "endTime": isoformat(self.end_time),
        }


@dataclass(frozen=True)
class Attendance:
    """Per-employee, per-day attendance row with its work segments."""

    attendance_id: int
    employee_id: int
    work_date: date
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    total_hours: Decimal = Decimal("0")
    status: ApprovalStatus = ApprovalStatus.NONE
    approver_id: Optional[int] = None
    submitted_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    timestamps: Tuple[AttendanceTimestamp, ...] = field(default_factory=tuple)

    def open_segment(self) -> Optional[AttendanceTimestamp]:
        for ts in self.timestamps:
            if ts.is_open:
                return ts
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employeeId": self.employee_id,
            "workDate": isoformat(self.work_date),
            "clockIn": isoformat(self.clock_in),
            "clockOut": isoformat(self.clock_out),
            "totalHours": float(self.total_hours),
            "status": self.status.value,
            "approverId": self.approver_id,
            "submittedAt": isoformat(self.submitted_at),
            "approvedAt": isoformat(self.approved_at),
            "timestamps": [ts.to_dict() for ts in self.timestamps],
        }


@dataclass(frozen=True)
class ClockOutResult:
    attendance: Attendance
    has_manager: bool
    manager_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "attendance": self.attendance.to_dict(),
            "hasManager": self.has_manager,
            "managerId": self.manager_id,
        }


@dataclass(frozen=True)
class TodaySession:
    """Read-model for the attendance timer: today's row plus derived state."""

    state: SessionState
    worked_seconds: int
    attendance: Optional[Attendance] = None

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "workedSeconds": self.worked_seconds,
            "attendance": self.attendance.to_dict() if self.attendance else None,
        }
