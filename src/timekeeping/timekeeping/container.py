from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeDirectory
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .payroll.mysql_compensation_repository import MySQLCompensationRepository
from .payroll.mysql_payslip_repository import MySQLPayslipRepository
from .payroll.repository import CompensationRepository, PayslipRepository
from .payroll.service import PayrollService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    compensation_repo: CompensationRepository
    payslips_repo: PayslipRepository

    employee_directory: EmployeeDirectory
    attendance_service: AttendanceService
    payroll_service: PayrollService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    compensation_repo: CompensationRepository,
    payslips_repo: PayslipRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of the given repositories."""
    directory = EmployeeDirectory(employees_repo)
    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        compensation_repo=compensation_repo,
        payslips_repo=payslips_repo,
        employee_directory=directory,
        attendance_service=AttendanceService(attendance_repo, directory),
        payroll_service=PayrollService(
            attendance_repo,
            leaves_repo,
            compensation_repo,
            payslips_repo,
            directory,
        ),
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire(
        conn=conn,
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        compensation_repo=MySQLCompensationRepository(conn),
        payslips_repo=MySQLPayslipRepository(conn),
    )
