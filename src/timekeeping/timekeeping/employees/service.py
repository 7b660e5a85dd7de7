from __future__ import annotations

from typing import Any, FrozenSet, Optional

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .model import Employee, User
from .repository import EmployeeRepository


class EmployeeDirectory:
    """Use case: resolve employees and their reporting lines."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def resolve(self, employee_ref: Any) -> Employee:
        """Find an employee by internal id, falling back to the business code."""
        ref = require_non_empty(employee_ref, "employeeId")

        employee = None
        if ref.isdigit():
            employee = self._employees.get_by_id(int(ref))
        if not employee:
            employee = self._employees.get_by_code(ref)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def get_manager(self, employee: Employee) -> Optional[User]:
        if not employee.manager_user_id:
            return None
        return self._employees.get_user(employee.manager_user_id)

    def get_user(self, user_id: int) -> User:
        user = self._employees.get_user(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def employee_for_user(self, user_id: int) -> Optional[Employee]:
        return self._employees.get_by_user_id(int(user_id))

    def direct_report_ids(self, manager_user_id: int) -> FrozenSet[int]:
        return frozenset(self._employees.list_direct_report_ids(int(manager_user_id)))
