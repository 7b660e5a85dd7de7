from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, User


class EmployeeRepository(Protocol):
    """Employee directory interface.

    Note (DIP): services depend on this protocol, not on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_user(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def list_direct_report_ids(self, manager_user_id: int) -> Sequence[int]:
        """Internal ids of employees whose manager is ``manager_user_id``."""

        raise NotImplementedError
