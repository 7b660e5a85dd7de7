from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Compensation, Payslip


class CompensationRepository(Protocol):
    def get_for_employee(self, employee_id: int) -> Optional[Compensation]:
        raise NotImplementedError


class PayslipRepository(Protocol):
    def save(self, payslip: Payslip) -> int:
        """Insert or replace the payslip of (employee, year, month); returns its id."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int) -> Sequence[Payslip]:
        """Newest period first (year desc, month desc)."""

        raise NotImplementedError
