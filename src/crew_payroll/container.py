from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .core.constants import DEFAULT_DAILY_THRESHOLD, DEFAULT_WEEK_STARTS_ON
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .jobsites.mysql_jobsite_repository import MySQLJobSiteRepository
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayrollReportService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRepository
    employees_repo: MySQLEmployeeRepository
    jobsites_repo: MySQLJobSiteRepository

    calculator: StandardPayrollCalculator
    payroll_report_service: PayrollReportService


def build_container(
    *,
    db_config: dict,
    daily_threshold: Any = DEFAULT_DAILY_THRESHOLD,
    week_starts_on: int = DEFAULT_WEEK_STARTS_ON,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    jobsites_repo = MySQLJobSiteRepository(conn)

    calculator = StandardPayrollCalculator(daily_threshold)
    payroll_report_service = PayrollReportService(
        attendance_repo,
        employees_repo,
        jobsites_repo,
        calculator=calculator,
        week_starts_on=week_starts_on,
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        jobsites_repo=jobsites_repo,
        calculator=calculator,
        payroll_report_service=payroll_report_service,
    )
