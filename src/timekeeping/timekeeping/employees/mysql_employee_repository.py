from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee, User
from .repository import EmployeeRepository

_EMPLOYEE_COLUMNS = "employee_id, employee_code, user_id, full_name, designation, manager_user_id"


def _to_employee(row: dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        employee_code=row["employee_code"],
        full_name=row["full_name"],
        user_id=row.get("user_id"),
        designation=row.get("designation"),
        manager_user_id=row.get("manager_user_id"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value: Any) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE {column}=%s", (value,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._get_one("employee_id", int(employee_id))

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        return self._get_one("employee_code", employee_code)

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        return self._get_one("user_id", int(user_id))

    def get_user(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, full_name, email, role
                FROM users
                WHERE user_id=%s AND is_active=1
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return User(
                user_id=int(row["user_id"]),
                full_name=row["full_name"],
                role=Role(row["role"]),
                email=row.get("email"),
            )

    def list_direct_report_ids(self, manager_user_id: int) -> Sequence[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT employee_id FROM employees WHERE manager_user_id=%s",
                (int(manager_user_id),),
            )
            return [int(r["employee_id"]) for r in fetchall(cur)]
