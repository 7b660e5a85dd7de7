from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LeaveRequest
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_overlapping(
        self,
        *,
        employee_id: int,
        status: LeaveStatus,
        start_date: date,
        end_date: date,
    ) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, employee_id, leave_type, start_date, end_date, status, reason
                FROM leave_requests
                WHERE employee_id=%s AND status=%s AND start_date <= %s AND end_date >= %s
                ORDER BY start_date ASC
                """,
                (int(employee_id), status.value, end_date, start_date),
            )
            return [
                LeaveRequest(
                    request_id=int(r["request_id"]),
                    employee_id=int(r["employee_id"]),
                    leave_type=r["leave_type"],
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                    status=LeaveStatus(r["status"]),
                    reason=r.get("reason"),
                )
                for r in fetchall(cur)
            ]
