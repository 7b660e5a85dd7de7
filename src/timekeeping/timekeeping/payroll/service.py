from __future__ import annotations

import logging
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.validators import require_month, require_year
from ..core.constants import MONEY_QUANTUM
from ..core.enums import ComponentType, DayStatus, LeaveStatus
from ..employees.model import Employee
from ..employees.service import EmployeeDirectory
from ..leaves.repository import LeaveRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .cycle import attendance_by_day, classify_day, leave_dates, payroll_cycle_dates, working_days_in_cycle
from .model import AttendanceSheet, Compensation, PayrollCycle, Payslip, SalaryComponent, SheetDay, SheetSummary
from .repository import CompensationRepository, PayslipRepository

logger = logging.getLogger(__name__)


def _money(value: Decimal) -> Decimal:
    return Decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


class PayrollService:
    """Attendance sheets and payslips for one payroll cycle.

    Every working day of the cycle is classified once (leave, present or
    absent) and both the sheet and the payslip are built from that
    classification, so their counts always agree.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        compensation: CompensationRepository,
        payslips: PayslipRepository,
        directory: EmployeeDirectory,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._leaves = leaves
        self._compensation = compensation
        self._payslips = payslips
        self._directory = directory
        self._calculator = calculator or StandardPayrollCalculator()

    def _compensation_for(self, employee: Employee) -> Compensation:
        return self._compensation.get_for_employee(employee.employee_id) or Compensation(
            employee_id=employee.employee_id
        )

    def _classify(self, employee: Employee, cycle: PayrollCycle) -> tuple[list[SheetDay], SheetSummary]:
        rows = self._attendance.list_in_range(
            employee_id=employee.employee_id,
            start_date=cycle.start.date(),
            end_date=cycle.end.date(),
        )
        leaves = self._leaves.list_overlapping(
            employee_id=employee.employee_id,
            status=LeaveStatus.APPROVED,
            start_date=cycle.start.date(),
            end_date=cycle.end.date(),
        )
        by_day = attendance_by_day(rows)
        on_leave = leave_dates(leaves)

        days: list[SheetDay] = []
        # Sheet and payslip share this classifier: a row without a clock-in is absent on both.
        for day in working_days_in_cycle(cycle.start, cycle.end):
            status = classify_day(day, attendance=by_day, on_leave=on_leave)
            record = by_day.get(day)
            days.append(
                SheetDay(
                    date=day,
                    status=status,
                    clock_in=record.clock_in if record else None,
                    clock_out=record.clock_out if record else None,
                    total_hours=record.total_hours if record else Decimal("0"),
                    is_on_leave=status == DayStatus.LEAVE,
                )
            )

        summary = SheetSummary(
            total_working_days=len(days),
            present_days=sum(1 for d in days if d.status == DayStatus.PRESENT),
            absent_days=sum(1 for d in days if d.status == DayStatus.ABSENT),
            leave_days=sum(1 for d in days if d.status == DayStatus.LEAVE),
        )
        return days, summary

    def attendance_sheet(self, employee_ref: Any, month: Any, year: Any) -> AttendanceSheet:
        cycle = payroll_cycle_dates(require_month(month), require_year(year))
        employee = self._directory.resolve(employee_ref)
        days, summary = self._classify(employee, cycle)

        return AttendanceSheet(
            employee=employee,
            basic_salary=self._compensation_for(employee).basic_salary,
            cycle=cycle,
            summary=summary,
            days=tuple(days),
        )

    def generate_payslip(self, employee_ref: Any, month: Any, year: Any) -> Payslip:
        cycle = payroll_cycle_dates(require_month(month), require_year(year))
        employee = self._directory.resolve(employee_ref)
        comp = self._compensation_for(employee)
        _, summary = self._classify(employee, cycle)

        gross = comp.gross_salary
        absence = self._calculator.absence_deduction(gross, summary.absent_days)

        allowances = tuple(
            SalaryComponent(name=name, amount=_money(amount), type=ComponentType.ALLOWANCE)
            for name, amount in (
                ("HRA", comp.house_rent_allowance),
                ("Special Allowance", comp.special_allowance),
            )
            if amount > 0
        )

        deductions = [
            SalaryComponent(name=name, amount=_money(amount), type=ComponentType.DEDUCTION)
            for name, amount in (
                ("PF", comp.employee_pf),
                ("ESI", comp.employee_esi),
                ("Professional Tax", comp.professional_tax),
                ("Income Tax (TDS)", comp.income_tax),
            )
            if amount > 0
        ]
        if summary.absent_days > 0:
            deductions.append(
                SalaryComponent(
                    name=self._calculator.absence_label(summary.absent_days),
                    amount=absence,
                    type=ComponentType.DEDUCTION,
                )
            )

        total_deductions = sum((d.amount for d in deductions), Decimal("0"))
        return Payslip(
            employee_id=employee.employee_id,
            employee_name=employee.full_name or "Unknown",
            month=cycle.month,
            year=cycle.year,
            basic_salary=_money(comp.basic_salary),
            allowances=allowances,
            deductions=tuple(deductions),
            gross_pay=_money(gross),
            net_pay=_money(gross - total_deductions),
            tax_deducted=_money(comp.income_tax),
            working_days=summary.total_working_days,
            present_days=summary.present_days,
            absent_days=summary.absent_days,
            leave_days=summary.leave_days,
            per_day_salary=_money(self._calculator.per_day_salary(gross)),
            absence_deduction=absence,
            cycle_start=cycle.start,
            cycle_end=cycle.end,
        )

    def get_payslip(self, employee_ref: Any, month: Any, year: Any) -> Payslip:
        # Always recomputed from current attendance, never read back from storage.
        return self.generate_payslip(employee_ref, month, year)

    def issue_payslip(self, employee_ref: Any, month: Any, year: Any) -> Payslip:
        payslip = self.generate_payslip(employee_ref, month, year)
        payslip_id = self._payslips.save(payslip)
        logger.info(
            "Issued payslip %s for employee %s (%02d/%s): net %s",
            payslip_id,
            payslip.employee_id,
            payslip.month,
            payslip.year,
            payslip.net_pay,
        )
        return replace(payslip, payslip_id=payslip_id)

    def list_payslips(self, employee_ref: Any) -> Sequence[Payslip]:
        employee = self._directory.resolve(employee_ref)
        return self._payslips.list_for_employee(employee.employee_id)
