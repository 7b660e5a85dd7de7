from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from ..core.enums import Role
from ..employees.model import User


@dataclass(frozen=True)
class AttendanceScope:
    """Which employees' rows a reader may see. ``None`` means everyone."""

    employee_ids: Optional[FrozenSet[int]] = None

    @property
    def is_unrestricted(self) -> bool:
        return self.employee_ids is None

    @property
    def is_empty(self) -> bool:
        return self.employee_ids is not None and not self.employee_ids

    def allows(self, employee_id: int) -> bool:
        return self.employee_ids is None or int(employee_id) in self.employee_ids


def scope_filter(
    user: User,
    *,
    own_employee_id: Optional[int],
    direct_report_ids: Iterable[int] = (),
) -> AttendanceScope:
    """Admins see all rows, managers their direct reports, employees themselves."""
    if user.role.is_admin:
        return AttendanceScope()
    if user.role == Role.MANAGER:
        return AttendanceScope(frozenset(int(i) for i in direct_report_ids))
    if own_employee_id is None:
        return AttendanceScope(frozenset())
    return AttendanceScope(frozenset({int(own_employee_id)}))
