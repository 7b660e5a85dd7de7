from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Sequence

from ..core.enums import ComponentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Payslip, SalaryComponent
from .repository import PayslipRepository


def _dump_components(components: Sequence[SalaryComponent]) -> str:
    return json.dumps([{"name": c.name, "amount": str(c.amount), "type": c.type.value} for c in components])


def _load_components(raw: str | None) -> tuple[SalaryComponent, ...]:
    return tuple(
        SalaryComponent(name=item["name"], amount=Decimal(str(item["amount"])), type=ComponentType(item["type"]))
        for item in json.loads(raw or "[]")
    )


def _to_payslip(r: dict[str, Any]) -> Payslip:
    return Payslip(
        payslip_id=int(r["payslip_id"]),
        employee_id=int(r["employee_id"]),
        employee_name=r["employee_name"],
        month=int(r["month"]),
        year=int(r["year"]),
        basic_salary=Decimal(r["basic_salary"]),
        allowances=_load_components(r.get("allowances")),
        deductions=_load_components(r.get("deductions")),
        gross_pay=Decimal(r["gross_pay"]),
        net_pay=Decimal(r["net_pay"]),
        tax_deducted=Decimal(r["tax_deducted"]),
        working_days=int(r["working_days"]),
        present_days=int(r["present_days"]),
        absent_days=int(r["absent_days"]),
        leave_days=int(r["leave_days"]),
        per_day_salary=Decimal(r["per_day_salary"]),
        absence_deduction=Decimal(r["absence_deduction"]),
        cycle_start=r["cycle_start"],
        cycle_end=r["cycle_end"],
        issued_at=r.get("issued_at"),
    )


class MySQLPayslipRepository(PayslipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save(self, payslip: Payslip) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payslips(
                    employee_id, employee_name, month, year, basic_salary, allowances, deductions,
                    gross_pay, net_pay, tax_deducted, working_days, present_days, absent_days,
                    leave_days, per_day_salary, absence_deduction, cycle_start, cycle_end
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s) AS new
                ON DUPLICATE KEY UPDATE
                    payslip_id=LAST_INSERT_ID(payslips.payslip_id),
                    employee_name=new.employee_name,
                    basic_salary=new.basic_salary,
                    allowances=new.allowances,
                    deductions=new.deductions,
                    gross_pay=new.gross_pay,
                    net_pay=new.net_pay,
                    tax_deducted=new.tax_deducted,
                    working_days=new.working_days,
                    present_days=new.present_days,
                    absent_days=new.absent_days,
                    leave_days=new.leave_days,
                    per_day_salary=new.per_day_salary,
                    absence_deduction=new.absence_deduction,
                    cycle_start=new.cycle_start,
                    cycle_end=new.cycle_end,
                    issued_at=CURRENT_TIMESTAMP
                """,
                (
                    payslip.employee_id,
                    payslip.employee_name,
                    payslip.month,
                    payslip.year,
                    payslip.basic_salary,
                    _dump_components(payslip.allowances),
                    _dump_components(payslip.deductions),
                    payslip.gross_pay,
                    payslip.net_pay,
                    payslip.tax_deducted,
                    payslip.working_days,
                    payslip.present_days,
                    payslip.absent_days,
                    payslip.leave_days,
                    payslip.per_day_salary,
                    payslip.absence_deduction,
                    payslip.cycle_start,
                    payslip.cycle_end,
                ),
            )
            return int(cur.lastrowid)

    def list_for_employee(self, employee_id: int) -> Sequence[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT payslip_id, employee_id, employee_name, month, year, basic_salary, allowances,
                       deductions, gross_pay, net_pay, tax_deducted, working_days, present_days,
                       absent_days, leave_days, per_day_salary, absence_deduction, cycle_start, cycle_end, issued_at
                FROM payslips
                WHERE employee_id=%s
                ORDER BY year DESC, month DESC
                """,
                (int(employee_id),),
            )
            return [_to_payslip(r) for r in fetchall(cur)]
