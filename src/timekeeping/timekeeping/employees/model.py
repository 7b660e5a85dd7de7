from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """A login identity: requesting user, manager or approver."""

    user_id: int
    full_name: str
    role: Role
    email: Optional[str] = None


@dataclass(frozen=True)
class Employee:
    """Employee directory entry.

    ``employee_id`` is the internal id, ``employee_code`` the business code
    (e.g. ``EMP-002``). ``manager_user_id`` points at the manager's user.
    """

    employee_id: int
    employee_code: str
    full_name: str
    user_id: Optional[int] = None
    designation: Optional[str] = None
    manager_user_id: Optional[int] = None
