from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from ..common.datetime_utils import isoformat
from ..core.enums import ComponentType, DayStatus
from ..employees.model import Employee


@dataclass(frozen=True)
class Compensation:
    """Monthly compensation figures of one employee."""

    employee_id: int
    basic_salary: Decimal = Decimal("0")
    house_rent_allowance: Decimal = Decimal("0")
    special_allowance: Decimal = Decimal("0")
    employee_pf: Decimal = Decimal("0")
    employee_esi: Decimal = Decimal("0")
    professional_tax: Decimal = Decimal("0")
    income_tax: Decimal = Decimal("0")

    @property
    def gross_salary(self) -> Decimal:
        return self.basic_salary + self.house_rent_allowance + self.special_allowance


@dataclass(frozen=True)
class PayrollCycle:
    month: int
    year: int
    start: datetime
    end: datetime

    def to_dict(self) -> dict:
        return {
            "start": isoformat(self.start),
            "end": isoformat(self.end),
            "month": self.month,
            "year": self.year,
        }


@dataclass(frozen=True)
class SalaryComponent:
    name: str
    amount: Decimal
    type: ComponentType

    def to_dict(self) -> dict:
        return {"name": self.name, "amount": float(self.amount), "type": self.type.value}


@dataclass(frozen=True)
class SheetDay:
    date: datetime
    status: DayStatus
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    total_hours: Decimal = Decimal("0")
    is_on_leave: bool = False

    def to_dict(self) -> dict:
        return {
            "date": isoformat(self.date),
            "status": self.status.value,
            "clockIn": isoformat(self.clock_in),
            "clockOut": isoformat(self.clock_out),
            "totalHours": float(self.total_hours),
            "isOnLeave": self.is_on_leave,
        }


@dataclass(frozen=True)
class SheetSummary:
    total_working_days: int
    present_days: int
    absent_days: int
    leave_days: int

    def to_dict(self) -> dict:
        return {
            "totalWorkingDays": self.total_working_days,
            "presentDays": self.present_days,
            "absentDays": self.absent_days,
            "leaveDays": self.leave_days,
        }


@dataclass(frozen=True)
class AttendanceSheet:
    employee: Employee
    basic_salary: Decimal
    cycle: PayrollCycle
    summary: SheetSummary
    days: Tuple[SheetDay, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "employee": {
                "id": self.employee.employee_id,
                "employeeId": self.employee.employee_code,
                "name": self.employee.full_name or "Unknown",
                "designation": self.employee.designation,
                "basicSalary": float(self.basic_salary),
            },
            "cycle": self.cycle.to_dict(),
            "summary": self.summary.to_dict(),
            "attendanceSheet": [d.to_dict() for d in self.days],
        }


@dataclass(frozen=True)
class Payslip:
    """Payslip for one payroll cycle. ``payslip_id`` is set once issued."""

    employee_id: int
    employee_name: str
    month: int
    year: int
    basic_salary: Decimal
    allowances: Tuple[SalaryComponent, ...]
    deductions: Tuple[SalaryComponent, ...]
    gross_pay: Decimal
    net_pay: Decimal
    tax_deducted: Decimal
    working_days: int
    present_days: int
    absent_days: int
    leave_days: int
    per_day_salary: Decimal
    absence_deduction: Decimal
    cycle_start: datetime
    cycle_end: datetime
    payslip_id: Optional[int] = None
    issued_at: Optional[datetime] = None

    @property
    def total_deductions(self) -> Decimal:
        return sum((d.amount for d in self.deductions), Decimal("0"))

    def to_dict(self) -> dict:
        return {
            "id": self.payslip_id,
            "employeeId": self.employee_id,
            "employeeName": self.employee_name,
            "month": f"{self.month:02d}",
            "year": self.year,
            "basicSalary": float(self.basic_salary),
            "allowances": [a.to_dict() for a in self.allowances],
            "deductions": [d.to_dict() for d in self.deductions],
            "grossPay": float(self.gross_pay),
            "netPay": float(self.net_pay),
            "taxDeducted": float(self.tax_deducted),
            "workingDays": self.working_days,
            "presentDays": self.present_days,
            "absentDays": self.absent_days,
            "leaveDays": self.leave_days,
            "perDaySalary": float(self.per_day_salary),
            "absenceDeduction": float(self.absence_deduction),
            "cycleStart": isoformat(self.cycle_start),
            "cycleEnd": isoformat(self.cycle_end),
            "issuedAt": isoformat(self.issued_at),
        }
