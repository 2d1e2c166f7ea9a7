from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from typing import Any, Callable, Optional, Sequence

from ..auth.identity import require_admin
from ..common.datetime_utils import Clock, month_bounds, to_local
from ..common.validators import require_enum
from ..core.enums import AttendanceStatus, DisplayStatus, Dressing, LeaveBucket, Role
from ..core.exceptions import (
    AlreadyCheckedOutError,
    DuplicateCheckInError,
    InvalidDressingError,
    NoOpenCheckInError,
    NotFoundError,
    ValidationError,
)
from ..core.logging import get_logger
from ..employees.model import Employee
from ..shifts.repository import ShiftRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .policy import AttendancePolicy
from .repository import AttendanceRepository
from .rules import classify_for_display
from .unit_of_work import UnitOfWork

logger = get_logger(__name__)

SCAN_CHECK_IN = "checkin"
SCAN_CHECK_OUT = "checkout"


def parse_dressing(value: Any) -> Dressing:
    try:
        return Dressing(value)
    except ValueError:
        raise InvalidDressingError(f"Dressing must be one of: formal, casual, none (got {value!r})")


class AttendanceService:
    """Check-in/check-out engine.

    Every write runs in one unit of work: the employee row is locked first, then
    the record is written together with any leave debit and the employee's
    current-day mirror fields.
    """

    def __init__(
        self,
        unit_of_work: Callable[[], UnitOfWork],
        attendance: AttendanceRepository,
        shifts: ShiftRepository,
        clock: Clock,
        *,
        policy: Optional[AttendancePolicy] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        qr_token: Optional[str] = None,
    ):
        self._uow = unit_of_work
        self._attendance = attendance
        self._shifts = shifts
        self._clock = clock
        self._policy = policy or AttendancePolicy()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._qr_token = qr_token

    # -- time -----------------------------------------------------------

    def now(self) -> datetime:
        return to_local(self._clock.now(), self._policy.timezone)

    def _local(self, instant: Optional[datetime]) -> datetime:
        if instant is None:
            return self.now()
        return to_local(instant, self._policy.timezone)

    def entry_time_for(self, employee: Employee) -> time:
        shift = self._shifts.get_by_id(employee.shift_id) if employee.shift_id else None
        return shift.entry_time if shift else self._policy.default_entry_time

    # -- writes ---------------------------------------------------------

    def check_in(
        self,
        employee_id: int,
        *,
        instant: Optional[datetime] = None,
        note: Optional[str] = None,
        dressing: Any = None,
    ) -> AttendanceRecord:
        local = self._local(instant)
        dressing_value = parse_dressing(dressing) if dressing else Dressing.NONE
        day = local.date()

        with self._uow() as uow:
            employee = uow.employees.get_for_update(int(employee_id))
            if not employee:
                raise NotFoundError(f"Employee {employee_id} not found")
            if uow.attendance.get_for_employee_and_date(employee.employee_id, day):
                raise DuplicateCheckInError("Already checked in today")

            entry_time = self.entry_time_for(employee)
            strategy = self._factory.for_checkin(
                instant=local, entry_time=entry_time, grace_minutes=self._policy.grace_minutes
            )
            decision = strategy.decide_checkin(instant=local, entry_at=datetime.combine(day, entry_time))

            if decision.status == AttendanceStatus.LATE:
                employee = self._apply_late_penalty(uow, employee, day)

            record = AttendanceRecord(
                attendance_id=0,
                employee_id=employee.employee_id,
                work_date=day,
                check_in_time=local,
                check_out_time=None,
                status=decision.status,
                dressing=dressing_value,
                note=(note or "").strip() or None,
            )
            record = replace(record, attendance_id=uow.attendance.create(record))
            uow.employees.save(self._mirror_check_in(employee, record))

        logger.info(
            "Check-in recorded: employee=%s day=%s status=%s minutes_late=%s",
            record.employee_id,
            day,
            record.status.value,
            decision.minutes_late,
        )
        return record

    def check_out(self, employee_id: int, *, instant: Optional[datetime] = None, note: Optional[str] = None) -> AttendanceRecord:
        local = self._local(instant)

        with self._uow() as uow:
            employee = uow.employees.get_for_update(int(employee_id))
            if not employee:
                raise NotFoundError(f"Employee {employee_id} not found")

            record = uow.attendance.get_for_employee_and_date(employee.employee_id, local.date())
            if not record or record.check_in_time is None:
                raise NoOpenCheckInError("No check-in found for today")
            if record.check_out_time is not None:
                raise AlreadyCheckedOutError("Already checked out today")
            if local < record.check_in_time:
                raise ValidationError("Check-out cannot be before check-in")

            new_note = (note or "").strip() or record.note
            if not uow.attendance.close(record.attendance_id, check_out_time=local, note=new_note):
                raise AlreadyCheckedOutError("Already checked out today")
            record = replace(record, check_out_time=local, note=new_note)

            if employee.current_check_in == record.check_in_time:
                uow.employees.save(replace(employee, current_check_out=local))

        logger.info("Check-out recorded: employee=%s day=%s", record.employee_id, record.work_date)
        return record

    def admin_manual_check_in(
        self,
        *,
        current_role: Role,
        employee_id: int,
        instant: datetime,
        note: Optional[str] = None,
        dressing: Any = None,
    ) -> AttendanceRecord:
        """Backfill a forgotten scan; same grace and penalty rules as self-service."""
        require_admin(current_role)
        if instant is None:
            raise ValidationError("Check-in time is required")
        return self.check_in(employee_id, instant=instant, note=note, dressing=dressing)

    def admin_manual_check_out(
        self,
        *,
        current_role: Role,
        employee_id: int,
        instant: datetime,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        require_admin(current_role)
        if instant is None:
            raise ValidationError("Check-out time is required")
        return self.check_out(employee_id, instant=instant, note=note)

    def set_dressing(self, *, current_role: Role, attendance_id: int, classification: Any) -> AttendanceRecord:
        require_admin(current_role)
        dressing = parse_dressing(classification)

        with self._uow() as uow:
            record = uow.attendance.get_by_id(int(attendance_id))
            if not record:
                raise NotFoundError(f"Attendance record {attendance_id} not found")
            record = replace(record, dressing=dressing)
            uow.attendance.save(record)
        return record

    def update_note(self, *, current_role: Role, attendance_id: int, note: Optional[str]) -> AttendanceRecord:
        require_admin(current_role)

        with self._uow() as uow:
            record = uow.attendance.get_by_id(int(attendance_id))
            if not record:
                raise NotFoundError(f"Attendance record {attendance_id} not found")
            record = replace(record, note=(note or "").strip() or None)
            uow.attendance.save(record)
        return record

    def mark_leave(
        self,
        *,
        current_role: Role,
        employee_id: int,
        work_date: date,
        bucket: Any,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        """Book a leave day and charge one unit of the chosen leave bucket."""
        require_admin(current_role)
        leave_bucket = require_enum(LeaveBucket, bucket, "Leave type")

        with self._uow() as uow:
            employee = uow.employees.get_for_update(int(employee_id))
            if not employee:
                raise NotFoundError(f"Employee {employee_id} not found")
            if uow.attendance.get_for_employee_and_date(employee.employee_id, work_date):
                raise DuplicateCheckInError(f"A record already exists for {work_date.isoformat()}")

            debit = self._policy.penalty.charge(employee.balance, leave_bucket)
            employee = replace(employee, annual_leaves=debit.after.annual, casual_leaves=debit.after.casual)

            record = AttendanceRecord(
                attendance_id=0,
                employee_id=employee.employee_id,
                work_date=work_date,
                check_in_time=None,
                check_out_time=None,
                status=AttendanceStatus.LEAVE,
                note=(note or "").strip() or None,
            )
            record = replace(record, attendance_id=uow.attendance.create(record))
            if work_date == self.now().date():
                employee = replace(employee, current_check_in=None, current_check_out=None, attendance_status=AttendanceStatus.LEAVE)
            uow.employees.save(employee)

        logger.info("Leave booked: employee=%s day=%s bucket=%s", employee_id, work_date, leave_bucket.value)
        return record

    def scan(self, employee_id: int, code: str) -> tuple[str, AttendanceRecord]:
        """QR trigger: check out when today's record is open, otherwise check in."""
        if not code or not code.strip():
            raise ValidationError("QR code must not be empty")
        if self._qr_token is not None and code.strip() != self._qr_token:
            raise ValidationError("Invalid or expired QR code")

        today = self.get_today_record(employee_id)
        if today and today.is_open:
            return SCAN_CHECK_OUT, self.check_out(employee_id)
        return SCAN_CHECK_IN, self.check_in(employee_id)

    def _apply_late_penalty(self, uow: UnitOfWork, employee: Employee, day: date) -> Employee:
        start, end = month_bounds(day)
        prior_late = uow.attendance.count_with_status(
            employee.employee_id, start=start, end=end, status=AttendanceStatus.LATE
        )
        penalty = self._policy.penalty
        if not penalty.is_due(prior_late):
            return employee

        bucket = penalty.choose_bucket(employee.balance)
        if bucket is None:
            logger.warning(
                "Late penalty not charged: employee=%s has no leave left and negative balances are disabled",
                employee.employee_id,
            )
            return employee

        after = employee.balance.debit(bucket)
        logger.info(
            "Late penalty: employee=%s late #%s this month, 1 %s leave deducted (%s -> %s)",
            employee.employee_id,
            prior_late + 1,
            bucket.value,
            employee.balance.get(bucket),
            after.get(bucket),
        )
        return replace(employee, annual_leaves=after.annual, casual_leaves=after.casual)

    @staticmethod
    def _mirror_check_in(employee: Employee, record: AttendanceRecord) -> Employee:
        # A backfilled past day must not overwrite a newer current-day mirror.
        latest = employee.current_check_in
        if latest is not None and record.work_date < latest.date():
            return employee
        return replace(
            employee,
            current_check_in=record.check_in_time,
            current_check_out=None,
            attendance_status=record.status,
        )

    # -- reads ----------------------------------------------------------

    def get_today_record(self, employee_id: int) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_employee_and_date(int(employee_id), self.now().date())

    def list_attendance(
        self,
        *,
        employee_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        if start and end and end < start:
            raise ValidationError("End date must not be before start date")
        return self._attendance.list_records(employee_id=employee_id, start=start, end=end)

    def classify_today_for_display(
        self,
        employee: Employee,
        record: Optional[AttendanceRecord],
        *,
        now: Optional[datetime] = None,
    ) -> DisplayStatus:
        """Read-only dashboard status: pending until entry + window, absent after."""
        return classify_for_display(
            record,
            entry_time=self.entry_time_for(employee),
            now=self._local(now),
            pending_window_minutes=self._policy.pending_window_minutes,
        )
