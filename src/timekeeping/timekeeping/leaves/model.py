from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: int
    leave_type: str
    start_date: date
    end_date: date
    status: LeaveStatus
    reason: Optional[str] = None
