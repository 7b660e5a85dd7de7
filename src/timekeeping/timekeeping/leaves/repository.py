from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def list_overlapping(
        self,
        *,
        employee_id: int,
        status: LeaveStatus,
        start_date: date,
        end_date: date,
    ) -> Sequence[LeaveRequest]:
        """Leaves with the given status that overlap ``[start_date, end_date]``."""

        raise NotImplementedError
