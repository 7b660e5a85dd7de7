from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..core.enums import ApprovalStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, is_duplicate_key
from .hours import total_hours
from .model import Attendance, AttendanceTimestamp
from .repository import AttendanceRepository
from .scope import AttendanceScope

logger = logging.getLogger(__name__)

_ATTENDANCE_COLUMNS = """
    attendance_id, employee_id, work_date, clock_in, clock_out, total_hours,
    status, approver_id, submitted_at, approved_at
"""


def _to_timestamp(row: dict[str, Any]) -> AttendanceTimestamp:
    return AttendanceTimestamp(
        timestamp_id=int(row["timestamp_id"]),
        attendance_id=int(row["attendance_id"]),
        start_time=row["start_time"],
        end_time=row.get("end_time"),
    )


def _to_attendance(row: dict[str, Any], timestamps: Sequence[AttendanceTimestamp]) -> Attendance:
    return Attendance(
        attendance_id=int(row["attendance_id"]),
        employee_id=int(row["employee_id"]),
        work_date=row["work_date"],
        clock_in=row.get("clock_in"),
        clock_out=row.get("clock_out"),
        total_hours=Decimal(row.get("total_hours") or 0),
        status=ApprovalStatus(row["status"]) if row.get("status") else ApprovalStatus.NONE,
        approver_id=row.get("approver_id"),
        submitted_at=row.get("submitted_at"),
        approved_at=row.get("approved_at"),
        timestamps=tuple(timestamps),
    )


def _load_timestamps(cur, attendance_ids: Sequence[int]) -> dict[int, list[AttendanceTimestamp]]:
    by_attendance: dict[int, list[AttendanceTimestamp]] = {i: [] for i in attendance_ids}
    if not attendance_ids:
        return by_attendance
    cur.execute(
        f"""
        SELECT timestamp_id, attendance_id, start_time, end_time
        FROM attendance_timestamps
        WHERE attendance_id IN ({in_clause(attendance_ids)})
        ORDER BY start_time ASC, timestamp_id ASC
        """,
        tuple(attendance_ids),
    )
    for r in fetchall(cur):
        by_attendance[int(r["attendance_id"])].append(_to_timestamp(r))
    return by_attendance


def _hydrate(cur, rows: Sequence[dict[str, Any]]) -> list[Attendance]:
    ids = [int(r["attendance_id"]) for r in rows]
    segments = _load_timestamps(cur, ids)
    return [_to_attendance(r, segments[int(r["attendance_id"])]) for r in rows]


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str, params: tuple, *, order_by: str = "work_date DESC") -> list[Attendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_ATTENDANCE_COLUMNS} FROM attendance WHERE {where} ORDER BY {order_by}",
                params,
            )
            return _hydrate(cur, fetchall(cur))

    def get_by_id(self, attendance_id: int) -> Optional[Attendance]:
        rows = self._select("attendance_id=%s", (int(attendance_id),))
        return rows[0] if rows else None

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[Attendance]:
        rows = self._select("employee_id=%s AND work_date=%s", (int(employee_id), work_date))
        return rows[0] if rows else None

    def attach_clock_in(self, *, employee_id: int, work_date: date, clock_in: datetime) -> int:
        # LAST_INSERT_ID(expr) makes lastrowid report the existing row on conflict.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(employee_id, work_date, clock_in)
                VALUES(%s,%s,%s) AS new
                ON DUPLICATE KEY UPDATE
                    attendance_id=LAST_INSERT_ID(attendance.attendance_id),
                    clock_in=COALESCE(attendance.clock_in, new.clock_in)
                """,
                (int(employee_id), work_date, clock_in),
            )
            return int(cur.lastrowid)

    def open_segment(self, *, attendance_id: int, start_time: datetime) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO attendance_timestamps(attendance_id, start_time) VALUES(%s,%s)",
                    (int(attendance_id), start_time),
                )
                return True
        except Exception as e:
            if is_duplicate_key(e):
                logger.debug("Segment already open for attendance %s", attendance_id)
                return False
            raise

    def close_open_segment(self, *, attendance_id: int, end_time: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_timestamps
                SET end_time=%s
                WHERE attendance_id=%s AND end_time IS NULL
                """,
                (end_time, int(attendance_id)),
            )
            return cur.rowcount > 0

    def close_day(
        self,
        *,
        attendance_id: int,
        clock_out: datetime,
        approver_id: Optional[int] = None,
        submitted_at: Optional[datetime] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT status FROM attendance WHERE attendance_id=%s FOR UPDATE",
                (int(attendance_id),),
            )
            row = fetchone(cur)
            if not row:
                return False
            status = ApprovalStatus(row["status"]) if row.get("status") else ApprovalStatus.NONE
            if status.locks_day:
                return False

            cur.execute(
                """
                UPDATE attendance_timestamps
                SET end_time=%s
                WHERE attendance_id=%s AND end_time IS NULL
                """,
                (clock_out, int(attendance_id)),
            )
            segments = _load_timestamps(cur, [int(attendance_id)])[int(attendance_id)]
            hours = total_hours(segments)

            if approver_id is None:
                cur.execute(
                    "UPDATE attendance SET clock_out=%s, total_hours=%s WHERE attendance_id=%s",
                    (clock_out, hours, int(attendance_id)),
                )
            else:
                cur.execute(
                    """
                    UPDATE attendance
                    SET clock_out=%s, total_hours=%s, approver_id=%s, status=%s, submitted_at=%s, approved_at=NULL
                    WHERE attendance_id=%s
                    """,
                    (
                        clock_out,
                        hours,
                        int(approver_id),
                        ApprovalStatus.SUBMITTED.value,
                        submitted_at,
                        int(attendance_id),
                    ),
                )
            return True

    def submit(self, *, attendance_id: int, approver_id: int, submitted_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET approver_id=%s, status=%s, submitted_at=%s, approved_at=NULL
                WHERE attendance_id=%s
                  AND clock_out IS NOT NULL
                  AND (status IS NULL OR status=%s)
                  AND NOT EXISTS (
                      SELECT 1 FROM attendance_timestamps t
                      WHERE t.attendance_id=attendance.attendance_id AND t.end_time IS NULL
                  )
                """,
                (
                    int(approver_id),
                    ApprovalStatus.SUBMITTED.value,
                    submitted_at,
                    int(attendance_id),
                    ApprovalStatus.REJECTED.value,
                ),
            )
            return cur.rowcount > 0

    def decide(self, *, attendance_id: int, status: ApprovalStatus, approved_at: Optional[datetime]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET status=%s, approved_at=%s
                WHERE attendance_id=%s AND status=%s
                """,
                (status.value, approved_at, int(attendance_id), ApprovalStatus.SUBMITTED.value),
            )
            return cur.rowcount > 0

    def list_for_employee(self, employee_id: int) -> Sequence[Attendance]:
        return self._select("employee_id=%s", (int(employee_id),))

    def list_for_approver(self, *, approver_id: int, status: ApprovalStatus) -> Sequence[Attendance]:
        return self._select("approver_id=%s AND status=%s", (int(approver_id), status.value))

    def list_by_status(self, *, status: ApprovalStatus, scope: AttendanceScope) -> Sequence[Attendance]:
        if scope.is_empty:
            return []
        if scope.is_unrestricted:
            return self._select("status=%s", (status.value,))

        ids = sorted(scope.employee_ids or ())
        return self._select(
            f"status=%s AND employee_id IN ({in_clause(ids)})",
            (status.value, *ids),
        )

    def list_in_range(self, *, employee_id: int, start_date: date, end_date: date) -> Sequence[Attendance]:
        return self._select(
            "employee_id=%s AND work_date BETWEEN %s AND %s",
            (int(employee_id), start_date, end_date),
            order_by="work_date ASC",
        )
