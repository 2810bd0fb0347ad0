from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.retention import AttendanceRetentionJob
from .attendance.service import AttendanceService
from .common.clock import Clock
from .core.constants import (
    DEFAULT_ABSENCE_WINDOW,
    DEFAULT_BATCH_SIZE,
    DEFAULT_RETENTION_MONTHS,
    DEFAULT_TIMEZONE,
)
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeDirectory
from .payroll.batch import MonthlyPayrollJob
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.repository import SalaryRepository
from .payroll.service import SalaryService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    clock: Clock

    employees_repo: EmployeeDirectory
    attendance_repo: AttendanceRepository
    salaries_repo: SalaryRepository

    attendance_service: AttendanceService
    salary_service: SalaryService
    payroll_job: MonthlyPayrollJob
    retention_job: AttendanceRetentionJob


def assemble(
    *,
    employees_repo: EmployeeDirectory,
    attendance_repo: AttendanceRepository,
    salaries_repo: SalaryRepository,
    clock: Clock,
    conn: Optional[DatabaseConnection] = None,
    absence_window: int = DEFAULT_ABSENCE_WINDOW,
    retention_months: int = DEFAULT_RETENTION_MONTHS,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> Container:
    """Wire services and jobs over the given stores."""
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        clock,
        strategy_factory=AttendanceStrategyFactory(),
        absence_window=absence_window,
    )
    salary_service = SalaryService(salaries_repo, employees_repo, attendance_repo, clock)

    return Container(
        conn=conn,
        clock=clock,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        salaries_repo=salaries_repo,
        attendance_service=attendance_service,
        salary_service=salary_service,
        payroll_job=MonthlyPayrollJob(salaries_repo, employees_repo, clock, batch_size=batch_size),
        retention_job=AttendanceRetentionJob(
            attendance_repo,
            clock,
            retention_months=retention_months,
            batch_size=batch_size,
        ),
    )


def build_container(
    *,
    db_config: dict,
    timezone: str = DEFAULT_TIMEZONE,
    absence_window: int = DEFAULT_ABSENCE_WINDOW,
    retention_months: int = DEFAULT_RETENTION_MONTHS,
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        salaries_repo=MySQLSalaryRepository(conn),
        clock=Clock(timezone),
        conn=conn,
        absence_window=absence_window,
        retention_months=retention_months,
        batch_size=batch_size,
    )


def build_container_from_settings(settings) -> Container:
    return build_container(
        db_config=getattr(settings, "DB_CONFIG"),
        timezone=getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE),
        absence_window=int(getattr(settings, "ABSENCE_WARNING_WINDOW", DEFAULT_ABSENCE_WINDOW)),
        retention_months=int(getattr(settings, "ATTENDANCE_RETENTION_MONTHS", DEFAULT_RETENTION_MONTHS)),
        batch_size=int(getattr(settings, "BATCH_SIZE", DEFAULT_BATCH_SIZE)),
    )
