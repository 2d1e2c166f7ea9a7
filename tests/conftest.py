from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, time
from typing import Optional
from zoneinfo import ZoneInfo

import pytest
from werkzeug.security import generate_password_hash

from shift_attendance.attendance.model import AttendanceRecord
from shift_attendance.attendance.policy import AttendancePolicy
from shift_attendance.common.datetime_utils import FixedClock
from shift_attendance.container import wire_services
from shift_attendance.core.enums import AttendanceStatus, Role, ShiftStatus, WorkingDays
from shift_attendance.core.exceptions import DuplicateCheckInError, DuplicateShiftNameError
from shift_attendance.employees.model import Employee
from shift_attendance.leaves.ledger import LatePenaltyPolicy
from shift_attendance.main import create_app
from shift_attendance.shifts.model import ShiftPolicy

KARACHI = ZoneInfo("Asia/Karachi")
QR_TOKEN = "TEST_QR_TOKEN"

# Monday
MONDAY = date(2025, 3, 3)


@dataclass
class InMemoryEmployees:
    rows: dict[int, Employee] = field(default_factory=dict)
    _id: int = 0

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.rows.get(employee_id)

    def get_for_update(self, employee_id: int) -> Optional[Employee]:
        return self.rows.get(employee_id)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return next((e for e in self.rows.values() if e.email == email), None)

    def list_all(self):
        return sorted(self.rows.values(), key=lambda e: e.full_name)

    def last_employee_code(self) -> Optional[str]:
        codes = sorted(e.employee_code for e in self.rows.values() if e.employee_code)
        return codes[-1] if codes else None

    def create(self, employee: Employee) -> int:
        self._id += 1
        self.rows[self._id] = replace(employee, employee_id=self._id)
        return self._id

    def save(self, employee: Employee) -> bool:
        if employee.employee_id not in self.rows:
            return False
        self.rows[employee.employee_id] = employee
        return True

    def delete_by_id(self, employee_id: int) -> bool:
        return self.rows.pop(employee_id, None) is not None


@dataclass
class InMemoryShifts:
    rows: dict[int, ShiftPolicy] = field(default_factory=dict)
    _id: int = 0

    def list_all(self):
        return sorted(self.rows.values(), key=lambda s: s.name)

    def list_active(self):
        return [s for s in self.list_all() if s.is_active]

    def get_by_id(self, shift_id: int) -> Optional[ShiftPolicy]:
        return self.rows.get(shift_id)

    def get_by_name(self, name: str) -> Optional[ShiftPolicy]:
        return next((s for s in self.rows.values() if s.name.lower() == name.lower()), None)

    def create(self, **fields) -> int:
        if self.get_by_name(fields["name"]):
            raise DuplicateShiftNameError(f"Shift name already exists: {fields['name']}")
        self._id += 1
        self.rows[self._id] = ShiftPolicy(shift_id=self._id, **fields)
        return self._id

    def update(self, policy: ShiftPolicy) -> bool:
        self.rows[policy.shift_id] = policy
        return True

    def delete(self, shift_id: int) -> bool:
        return self.rows.pop(shift_id, None) is not None


@dataclass
class InMemoryAttendance:
    rows: dict[int, AttendanceRecord] = field(default_factory=dict)
    _id: int = 0

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self.rows.get(attendance_id)

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return next(
            (r for r in self.rows.values() if r.employee_id == employee_id and r.work_date == work_date),
            None,
        )

    def count_with_status(self, employee_id: int, *, start: date, end: date, status: AttendanceStatus) -> int:
        return sum(
            1
            for r in self.rows.values()
            if r.employee_id == employee_id and start <= r.work_date <= end and r.status == status
        )

    def list_records(self, *, employee_id=None, start=None, end=None):
        items = [
            r
            for r in self.rows.values()
            if (employee_id is None or r.employee_id == employee_id)
            and (start is None or r.work_date >= start)
            and (end is None or r.work_date <= end)
        ]
        return sorted(items, key=lambda r: (r.work_date, r.attendance_id), reverse=True)

    def create(self, record: AttendanceRecord) -> int:
        if self.get_for_employee_and_date(record.employee_id, record.work_date):
            raise DuplicateCheckInError("Already checked in today")
        self._id += 1
        self.rows[self._id] = replace(record, attendance_id=self._id)
        return self._id

    def close(self, attendance_id: int, *, check_out_time: datetime, note: Optional[str]) -> bool:
        record = self.rows.get(attendance_id)
        if record is None or record.check_out_time is not None:
            return False
        self.rows[attendance_id] = replace(record, check_out_time=check_out_time, note=note)
        return True

    def save(self, record: AttendanceRecord) -> bool:
        self.rows[record.attendance_id] = record
        return True


class InMemoryUnitOfWork:
    """Snapshots both stores on enter and restores them if the block raises."""

    def __init__(self, employees: InMemoryEmployees, attendance: InMemoryAttendance):
        self.employees = employees
        self.attendance = attendance
        self._snapshot = None

    def __enter__(self):
        self._snapshot = (dict(self.employees.rows), dict(self.attendance.rows), self.attendance._id)
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            employees, attendance, last_id = self._snapshot
            self.employees.rows.clear()
            self.employees.rows.update(employees)
            self.attendance.rows.clear()
            self.attendance.rows.update(attendance)
            self.attendance._id = last_id


@dataclass
class World:
    employees: InMemoryEmployees
    shifts: InMemoryShifts
    attendance: InMemoryAttendance
    clock: FixedClock
    container: object

    def add_shift(self, name: str = "Day Shift", entry: time = time(9, 0), exit_: time = time(18, 0), **kw) -> ShiftPolicy:
        shift_id = self.shifts.create(
            name=name,
            entry_time=entry,
            exit_time=exit_,
            break_start=kw.get("break_start", time(13, 0)),
            break_end=kw.get("break_end", time(14, 0)),
            break_duration=kw.get("break_duration", 60),
            working_days=kw.get("working_days", WorkingDays.MONDAY_SATURDAY),
            status=kw.get("status", ShiftStatus.ACTIVE),
        )
        return self.shifts.get_by_id(shift_id)

    def add_employee(
        self,
        name: str = "Ali Raza",
        *,
        email: Optional[str] = None,
        role: Role = Role.EMPLOYEE,
        shift_id: Optional[int] = None,
        password: str = "secret123",
        annual: int = 12,
        casual: int = 12,
    ) -> Employee:
        n = self.employees._id + 1
        employee_id = self.employees.create(
            Employee(
                employee_id=0,
                employee_code=f"EMP{n:02d}" if role == Role.EMPLOYEE else "",
                full_name=name,
                email=email or f"user{n}@company.com",
                password_hash=generate_password_hash(password),
                role=role,
                shift_id=shift_id,
                department="Engineering",
                annual_leaves=annual,
                casual_leaves=casual,
            )
        )
        return self.employees.get_by_id(employee_id)

    def set_time(self, hour: int, minute: int = 0, second: int = 0, day: date = MONDAY) -> None:
        self.clock.current = datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=KARACHI)


def build_world(*, allow_negative_balance: bool = True) -> World:
    employees = InMemoryEmployees()
    shifts = InMemoryShifts()
    attendance = InMemoryAttendance()
    clock = FixedClock(datetime(2025, 3, 3, 8, 30, tzinfo=KARACHI))
    policy = AttendancePolicy(
        penalty=LatePenaltyPolicy(every=3, allow_negative_balance=allow_negative_balance),
        timezone=KARACHI,
    )
    container = wire_services(
        employees_repo=employees,
        shifts_repo=shifts,
        attendance_repo=attendance,
        unit_of_work=lambda: InMemoryUnitOfWork(employees, attendance),
        clock=clock,
        policy=policy,
        qr_token=QR_TOKEN,
    )
    return World(employees=employees, shifts=shifts, attendance=attendance, clock=clock, container=container)


@pytest.fixture
def world() -> World:
    return build_world()


@pytest.fixture
def app(world):
    return create_app(container=world.container, settings_module="shift_attendance.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(email: str, password: str = "secret123"):
        return client.post("/api/auth/login", json={"email": email, "password": password})

    return _login


@pytest.fixture
def make_world():
    return build_world
