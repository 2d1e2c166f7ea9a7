from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, Dressing


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    Lifecycle: open (check-in set) -> closed (check-out set). Leave days have
    no check-in and can never be opened.
    """

    attendance_id: int
    employee_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    dressing: Dressing = Dressing.NONE
    note: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.check_in_time is not None and self.check_out_time is None

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "employee_id": self.employee_id,
            "date": self.work_date.isoformat(),
            "check_in": self.check_in_time.isoformat() if self.check_in_time else None,
            "check_out": self.check_out_time.isoformat() if self.check_out_time else None,
            "status": self.status.value,
            "dressing": self.dressing.value,
            "note": self.note,
        }
