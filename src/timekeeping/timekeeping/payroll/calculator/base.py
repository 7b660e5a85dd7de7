from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def per_day_salary(self, gross_salary: Decimal) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def absence_deduction(self, gross_salary: Decimal, absent_days: int) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def absence_label(self, absent_days: int) -> str:
        raise NotImplementedError
