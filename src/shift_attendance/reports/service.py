from __future__ import annotations

import csv
import io
from collections import Counter, defaultdict
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..attendance.service import AttendanceService
from ..auth.identity import require_admin
from ..common.datetime_utils import month_bounds
from ..core.enums import AttendanceStatus, Role, WorkingDays
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..shifts.model import working_weekdays
from ..shifts.repository import ShiftRepository


@dataclass(frozen=True)
class TodayRow:
    employee_id: int
    employee_code: str
    full_name: str
    department: str
    status: str
    check_in: Optional[str]
    check_out: Optional[str]
    dressing: str
    is_late_today: bool
    late_summary: str
    monthly_leaves: int


@dataclass(frozen=True)
class MonthlyRow:
    employee_id: int
    employee_code: str
    full_name: str
    expected_days: int
    present: int
    late: int
    leave: int
    absent: int


MONTHLY_CSV_FIELDS = [f for f in MonthlyRow.__dataclass_fields__]


class ReportService:
    """Read-only dashboards derived from the attendance store and directory."""

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        shifts: ShiftRepository,
        attendance_service: AttendanceService,
    ):
        self._employees = employees
        self._attendance = attendance
        self._shifts = shifts
        self._engine = attendance_service

    def _staff(self) -> list[Employee]:
        return [e for e in self._employees.list_all() if e.role == Role.EMPLOYEE]

    def _by_employee(self, start: date, end: date) -> dict[int, list[AttendanceRecord]]:
        grouped: dict[int, list[AttendanceRecord]] = defaultdict(list)
        for r in self._attendance.list_records(start=start, end=end):
            grouped[r.employee_id].append(r)
        return grouped

    def today_board(self, *, current_role: Role) -> list[TodayRow]:
        require_admin(current_role)
        now = self._engine.now()
        today = now.date()
        month_start, _ = month_bounds(today)
        month_records = self._by_employee(month_start, today)

        rows: list[TodayRow] = []
        for emp in self._staff():
            records = month_records.get(emp.employee_id, [])
            todays = next((r for r in records if r.work_date == today), None)
            counts = Counter(r.status for r in records)
            _, absent = self._attendance_tally(emp, month_start, today, records)
            status = self._engine.classify_today_for_display(emp, todays, now=now)
            rows.append(
                TodayRow(
                    employee_id=emp.employee_id,
                    employee_code=emp.employee_code,
                    full_name=emp.full_name,
                    department=emp.department,
                    status=status.value,
                    check_in=todays.check_in_time.isoformat() if todays and todays.check_in_time else None,
                    check_out=todays.check_out_time.isoformat() if todays and todays.check_out_time else None,
                    dressing=todays.dressing.value if todays else "none",
                    is_late_today=bool(todays and todays.status == AttendanceStatus.LATE),
                    late_summary=f"{counts[AttendanceStatus.LATE]} Late, {absent} Absent",
                    monthly_leaves=counts[AttendanceStatus.LEAVE],
                )
            )
        return rows

    def monthly_summary(
        self,
        *,
        current_role: Role,
        year: int,
        month: int,
        as_of: Optional[date] = None,
    ) -> list[MonthlyRow]:
        """Per-employee counts for a month.

        Absent = working days elapsed (before `as_of`, plus `as_of` itself once a
        record exists for it) minus days present, late or on leave, floored at 0.
        """
        require_admin(current_role)
        try:
            first = date(int(year), int(month), 1)
        except (TypeError, ValueError):
            raise ValidationError("Invalid year/month")
        as_of = as_of or self._engine.now().date()
        start, end = month_bounds(first)
        grouped = self._by_employee(start, end)

        rows: list[MonthlyRow] = []
        for emp in self._staff():
            records = [r for r in grouped.get(emp.employee_id, []) if r.work_date <= as_of]
            counts = Counter(r.status for r in records)
            expected, absent = self._attendance_tally(emp, start, as_of, records)
            rows.append(
                MonthlyRow(
                    employee_id=emp.employee_id,
                    employee_code=emp.employee_code,
                    full_name=emp.full_name,
                    expected_days=expected,
                    present=counts[AttendanceStatus.PRESENT],
                    late=counts[AttendanceStatus.LATE],
                    leave=counts[AttendanceStatus.LEAVE],
                    absent=absent,
                )
            )
        return rows

    def monthly_csv(self, *, current_role: Role, year: int, month: int, as_of: Optional[date] = None) -> str:
        rows = self.monthly_summary(current_role=current_role, year=year, month=month, as_of=as_of)
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=MONTHLY_CSV_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(asdict(row))
        return out.getvalue()

    def _attendance_tally(
        self, emp: Employee, start: date, as_of: date, records: Sequence[AttendanceRecord]
    ) -> tuple[int, int]:
        """(expected working days, absent days) for records in [start, as_of]."""
        _, end = month_bounds(start)
        counts = Counter(r.status for r in records)
        expected = self._expected_days(emp, start, end, as_of, {r.work_date for r in records})
        attended = counts[AttendanceStatus.PRESENT] + counts[AttendanceStatus.LATE] + counts[AttendanceStatus.LEAVE]
        return expected, max(expected - attended, 0)

    def _expected_days(self, emp: Employee, start: date, end: date, as_of: date, recorded: set[date]) -> int:
        shift = self._shifts.get_by_id(emp.shift_id) if emp.shift_id else None
        weekdays = working_weekdays(shift.working_days if shift else WorkingDays.MONDAY_SATURDAY)

        days = 0
        d = start
        while d <= min(end, as_of):
            # as_of itself only counts once something was recorded for it
            if d.weekday() in weekdays and (d < as_of or d in recorded):
                days += 1
            d += timedelta(days=1)
        return days


def rows_as_dicts(rows: Sequence[object]) -> list[dict]:
    return [asdict(r) for r in rows]
