from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from types import ModuleType
from typing import Callable, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.mysql_unit_of_work import MySQLUnitOfWork
from .attendance.policy import AttendancePolicy
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.unit_of_work import UnitOfWork
from .auth.service import AuthService
from .common.datetime_utils import Clock, SystemClock, load_timezone, parse_hhmm
from .core import constants
from .database.connection import DatabaseConnection, DBConfig
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .leaves.ledger import LatePenaltyPolicy
from .reports.service import ReportService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    shifts_repo: ShiftRepository
    attendance_repo: AttendanceRepository

    auth_service: AuthService
    employee_service: EmployeeService
    shift_service: ShiftService
    attendance_service: AttendanceService
    report_service: ReportService

    qr_token: str
    conn: Optional[DatabaseConnection] = None


def policy_from_settings(settings: ModuleType) -> AttendancePolicy:
    return AttendancePolicy(
        grace_minutes=int(getattr(settings, "GRACE_MINUTES", constants.DEFAULT_GRACE_MINUTES)),
        pending_window_minutes=int(getattr(settings, "PENDING_WINDOW_MINUTES", constants.DEFAULT_PENDING_WINDOW_MINUTES)),
        penalty=LatePenaltyPolicy(
            every=int(getattr(settings, "LATE_PENALTY_EVERY", constants.DEFAULT_LATE_PENALTY_EVERY)),
            allow_negative_balance=bool(getattr(settings, "ALLOW_NEGATIVE_BALANCE", True)),
        ),
        default_entry_time=parse_hhmm(getattr(settings, "DEFAULT_ENTRY_TIME", constants.DEFAULT_ENTRY_TIME)),
        timezone=load_timezone(getattr(settings, "TIMEZONE", constants.DEFAULT_TIMEZONE)),
    )


def wire_services(
    *,
    employees_repo: EmployeeRepository,
    shifts_repo: ShiftRepository,
    attendance_repo: AttendanceRepository,
    unit_of_work: Callable[[], UnitOfWork],
    clock: Clock,
    policy: AttendancePolicy,
    qr_token: str,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build the service graph on top of any repository implementation."""
    attendance_service = AttendanceService(
        unit_of_work,
        attendance_repo,
        shifts_repo,
        clock,
        policy=policy,
        strategy_factory=AttendanceStrategyFactory(),
        qr_token=qr_token,
    )
    return Container(
        employees_repo=employees_repo,
        shifts_repo=shifts_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(employees_repo, shifts_repo),
        employee_service=EmployeeService(employees_repo, shifts_repo),
        shift_service=ShiftService(shifts_repo),
        attendance_service=attendance_service,
        report_service=ReportService(employees_repo, attendance_repo, shifts_repo, attendance_service),
        qr_token=qr_token,
        conn=conn,
    )


def build_container(*, db_config: dict, settings: ModuleType, clock: Optional[Clock] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    policy = policy_from_settings(settings)

    return wire_services(
        employees_repo=MySQLEmployeeRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        unit_of_work=partial(MySQLUnitOfWork, conn),
        clock=clock or SystemClock(policy.timezone),
        policy=policy,
        qr_token=str(getattr(settings, "QR_TOKEN", "OFFICE_CHECKIN_SYSTEM")),
        conn=conn,
    )
