from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from src.timekeeping.timekeeping.container import wire
from src.timekeeping.timekeeping.payroll.model import Compensation

from tests.fakes import (
    ADMIN,
    ELI,
    ELI_EMP,
    HR,
    MAYA,
    MAYA_EMP,
    NOOR,
    NOOR_EMP,
    InMemoryAttendance,
    InMemoryCompensation,
    InMemoryEmployees,
    InMemoryLeaves,
    InMemoryPayslips,
)


@pytest.fixture
def monday() -> datetime:
    return datetime(2024, 3, 4)


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        users={u.user_id: u for u in (ADMIN, MAYA, ELI, NOOR, HR)},
        employees={e.employee_id: e for e in (MAYA_EMP, ELI_EMP, NOOR_EMP)},
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def leaves_repo() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def compensation_repo() -> InMemoryCompensation:
    return InMemoryCompensation(
        {
            ELI_EMP.employee_id: Compensation(
                employee_id=ELI_EMP.employee_id,
                basic_salary=Decimal("50000"),
                house_rent_allowance=Decimal("15000"),
                special_allowance=Decimal("20000"),
                employee_pf=Decimal("1800"),
                professional_tax=Decimal("200"),
                income_tax=Decimal("4000"),
            )
        }
    )


@pytest.fixture
def payslips_repo() -> InMemoryPayslips:
    return InMemoryPayslips()


@pytest.fixture
def container(employees, attendance_repo, leaves_repo, compensation_repo, payslips_repo):
    return wire(
        employees_repo=employees,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        compensation_repo=compensation_repo,
        payslips_repo=payslips_repo,
    )
