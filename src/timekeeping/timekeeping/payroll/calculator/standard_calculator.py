from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import ABSENCE_PENALTY_MULTIPLIER, MONEY_QUANTUM, PER_DAY_SALARY_DIVISOR
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: gross / 30 per day, each absent day costs 1.5 days."""

    def __init__(
        self,
        *,
        divisor: Decimal = PER_DAY_SALARY_DIVISOR,
        multiplier: Decimal = ABSENCE_PENALTY_MULTIPLIER,
    ):
        self._divisor = Decimal(divisor)
        self._multiplier = Decimal(multiplier)

    def per_day_salary(self, gross_salary: Decimal) -> Decimal:
        return Decimal(gross_salary) / self._divisor

    def absence_deduction(self, gross_salary: Decimal, absent_days: int) -> Decimal:
        if absent_days <= 0:
            return Decimal("0.00")
        amount = int(absent_days) * self.per_day_salary(gross_salary) * self._multiplier
        return amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)

    def absence_label(self, absent_days: int) -> str:
        return f"Absence Deduction ({absent_days} days × {self._multiplier})"
