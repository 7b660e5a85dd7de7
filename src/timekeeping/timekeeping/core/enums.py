from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of the requesting user, used for read scoping and approvals."""

    GLOBAL_ADMIN = "global_admin"
    HR_MANAGER = "hr_manager"
    MANAGER = "manager"
    EMPLOYEE = "employee"

    @property
    def is_admin(self) -> bool:
        return self in {Role.GLOBAL_ADMIN, Role.HR_MANAGER}


class ApprovalStatus(str, Enum):
    """Approval state of an attendance row. NULL in the database maps to NONE."""

    NONE = "none"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def locks_day(self) -> bool:
        """Submitted or approved days can no longer be worked on or resubmitted."""
        return self in {ApprovalStatus.SUBMITTED, ApprovalStatus.APPROVED}


class SessionState(str, Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    CLOSED = "closed"


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class DayStatus(str, Enum):
    """Classification of a working day on the payroll attendance sheet."""

    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"


class ComponentType(str, Enum):
    ALLOWANCE = "allowance"
    DEDUCTION = "deduction"
