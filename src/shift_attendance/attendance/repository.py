from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def count_with_status(self, employee_id: int, *, start: date, end: date, status: AttendanceStatus) -> int:
        """Count records with `status` whose work_date is within [start, end]."""

        raise NotImplementedError

    def list_records(
        self,
        *,
        employee_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        """Newest day first."""

        raise NotImplementedError

    def create(self, record: AttendanceRecord) -> int:
        """Insert and return the new id.

        Raises DuplicateCheckInError when (employee_id, work_date) already exists.
        """

        raise NotImplementedError

    def close(self, attendance_id: int, *, check_out_time: datetime, note: Optional[str]) -> bool:
        """Set check_out_time only if it is still unset; False when it was already set."""

        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> bool:
        """Persist dressing/note/status edits of an existing record."""

        raise NotImplementedError
