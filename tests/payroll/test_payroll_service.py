from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from src.timekeeping.timekeeping.attendance.model import Attendance
from src.timekeeping.timekeeping.core.enums import ApprovalStatus, DayStatus, LeaveStatus
from src.timekeeping.timekeeping.core.exceptions import NotFoundError, ValidationError
from src.timekeeping.timekeeping.leaves.model import LeaveRequest


@pytest.fixture
def service(container):
    return container.payroll_service


@pytest.fixture
def march_2024(attendance_repo, leaves_repo):
    """Eli's March 2024 cycle: 25 working days, 2 on leave, 3 absent, 20 present."""
    leaves_repo.leaves.append(
        LeaveRequest(
            request_id=1,
            employee_id=2,
            leave_type="casual",
            start_date=date(2024, 3, 4),
            end_date=date(2024, 3, 5),
            status=LeaveStatus.APPROVED,
        )
    )
    leaves_repo.leaves.append(
        LeaveRequest(
            request_id=2,
            employee_id=2,
            leave_type="casual",
            start_date=date(2024, 3, 11),
            end_date=date(2024, 3, 11),
            status=LeaveStatus.PENDING,
        )
    )

    absent = {date(2024, 3, 6), date(2024, 3, 7)}
    day = date(2024, 2, 22)
    next_id = 1
    while day <= date(2024, 3, 21):
        if day not in absent:
            clock_in = None if day == date(2024, 3, 8) else datetime.combine(day, datetime.min.time()).replace(hour=9)
            attendance_repo.add(
                Attendance(
                    attendance_id=next_id,
                    employee_id=2,
                    work_date=day,
                    clock_in=clock_in,
                    clock_out=clock_in + timedelta(hours=8) if clock_in else None,
                    total_hours=Decimal("8.00") if clock_in else Decimal("0"),
                    status=ApprovalStatus.APPROVED,
                )
            )
            next_id += 1
        day += timedelta(days=1)


def test_attendance_sheet_classifies_each_working_day(service, march_2024):
    sheet = service.attendance_sheet("EMP-002", 3, 2024)

    assert sheet.summary.total_working_days == 25
    assert sheet.summary.leave_days == 2
    assert sheet.summary.absent_days == 3
    assert sheet.summary.present_days == 20

    by_date = {d.date.date(): d for d in sheet.days}
    assert by_date[date(2024, 3, 4)].status == DayStatus.LEAVE
    assert by_date[date(2024, 3, 4)].is_on_leave is True
    assert by_date[date(2024, 3, 4)].clock_in is not None
    assert by_date[date(2024, 3, 8)].status == DayStatus.ABSENT
    assert by_date[date(2024, 3, 11)].status == DayStatus.PRESENT
    assert date(2024, 3, 3) not in by_date


def test_attendance_sheet_envelope(service, march_2024):
    data = service.attendance_sheet(2, "3", "2024").to_dict()

    assert data["employee"] == {
        "id": 2,
        "employeeId": "EMP-002",
        "name": "Eli Employee",
        "designation": "Engineer",
        "basicSalary": 50000.0,
    }
    assert data["cycle"]["start"] == "2024-02-22T00:00:00.000"
    assert data["summary"]["totalWorkingDays"] == 25
    assert len(data["attendanceSheet"]) == 25
    assert data["attendanceSheet"][0]["date"] == "2024-02-22T00:00:00.000"
    assert data["attendanceSheet"][0]["totalHours"] == 8.0


def test_payslip_lines_and_totals(service, march_2024):
    payslip = service.generate_payslip("EMP-002", 3, 2024)

    assert payslip.gross_pay == Decimal("85000.00")
    assert payslip.per_day_salary == Decimal("2833.33")
    assert payslip.absent_days == 3
    assert payslip.absence_deduction == Decimal("12750.00")

    assert [(a.name, a.amount) for a in payslip.allowances] == [
        ("HRA", Decimal("15000.00")),
        ("Special Allowance", Decimal("20000.00")),
    ]
    assert [(d.name, d.amount) for d in payslip.deductions] == [
        ("PF", Decimal("1800.00")),
        ("Professional Tax", Decimal("200.00")),
        ("Income Tax (TDS)", Decimal("4000.00")),
        ("Absence Deduction (3 days × 1.5)", Decimal("12750.00")),
    ]
    assert payslip.net_pay == Decimal("66250.00")
    assert payslip.tax_deducted == Decimal("4000.00")
    assert payslip.to_dict()["month"] == "03"


def test_payslip_agrees_with_sheet(service, march_2024):
    sheet = service.attendance_sheet(2, 3, 2024)
    payslip = service.get_payslip(2, 3, 2024)

    assert payslip.working_days == sheet.summary.total_working_days
    assert payslip.present_days == sheet.summary.present_days
    assert payslip.absent_days == sheet.summary.absent_days
    assert payslip.leave_days == sheet.summary.leave_days


def test_payslip_without_compensation_is_zero(service):
    payslip = service.generate_payslip(3, 3, 2024)

    assert payslip.gross_pay == Decimal("0.00")
    assert payslip.net_pay == Decimal("0.00")
    assert payslip.allowances == ()
    assert payslip.absent_days == 25
    assert [d.name for d in payslip.deductions] == ["Absence Deduction (25 days × 1.5)"]


def test_no_absence_line_when_fully_present(service, attendance_repo):
    day = date(2023, 12, 22)
    next_id = 1
    while day <= date(2024, 1, 21):
        attendance_repo.add(
            Attendance(
                attendance_id=next_id,
                employee_id=2,
                work_date=day,
                clock_in=datetime.combine(day, datetime.min.time()).replace(hour=9),
            )
        )
        next_id += 1
        day += timedelta(days=1)

    payslip = service.generate_payslip(2, 1, 2024)

    assert payslip.working_days == 26
    assert payslip.absent_days == 0
    assert payslip.absence_deduction == Decimal("0.00")
    assert all(not d.name.startswith("Absence") for d in payslip.deductions)
    assert payslip.net_pay == Decimal("79000.00")


def test_issue_payslip_persists_and_replaces_same_period(service, march_2024):
    first = service.issue_payslip(2, 3, 2024)
    again = service.issue_payslip("EMP-002", 3, 2024)
    service.issue_payslip(2, 2, 2024)

    assert first.payslip_id is not None
    assert again.payslip_id == first.payslip_id

    stored = service.list_payslips(2)
    assert [(p.year, p.month) for p in stored] == [(2024, 3), (2024, 2)]


@pytest.mark.parametrize("month, year", [(0, 2024), (13, 2024), ("x", 2024), (3, 0), (3, None)])
def test_invalid_period(service, month, year):
    with pytest.raises(ValidationError):
        service.attendance_sheet(2, month, year)


def test_unknown_employee(service):
    with pytest.raises(NotFoundError):
        service.generate_payslip("EMP-404", 3, 2024)
