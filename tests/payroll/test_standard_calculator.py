from decimal import Decimal

from src.timekeeping.timekeeping.payroll.calculator.standard_calculator import StandardPayrollCalculator


def test_two_absent_days_cost_three_days_of_pay():
    calc = StandardPayrollCalculator()

    assert calc.per_day_salary(Decimal("85000")).quantize(Decimal("0.01")) == Decimal("2833.33")
    assert calc.absence_deduction(Decimal("85000"), 2) == Decimal("8500.00")


def test_label_names_days_and_multiplier():
    assert "2 days × 1.5" in StandardPayrollCalculator().absence_label(2)


def test_no_absence_no_deduction():
    assert StandardPayrollCalculator().absence_deduction(Decimal("85000"), 0) == Decimal("0.00")


def test_divisor_is_fixed_regardless_of_cycle_length():
    calc = StandardPayrollCalculator()
    assert calc.per_day_salary(Decimal("3000")) == Decimal("100")
