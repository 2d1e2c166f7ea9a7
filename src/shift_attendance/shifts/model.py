from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..common.datetime_utils import format_hhmm
from ..core.enums import ShiftStatus, WorkingDays

_WEEKDAYS = {
    WorkingDays.MONDAY_SATURDAY: frozenset(range(0, 6)),
    WorkingDays.MONDAY_FRIDAY: frozenset(range(0, 5)),
}


def working_weekdays(category: WorkingDays) -> frozenset[int]:
    """Weekday numbers (Monday=0) covered by a working-days category."""
    return _WEEKDAYS[WorkingDays(category)]


@dataclass(frozen=True)
class ShiftPolicy:
    """Domain entity: a named daily recurring shift rule.

    Times are local wall-clock values, not instants.
    """

    shift_id: int
    name: str
    entry_time: time
    exit_time: time
    break_start: time
    break_end: time
    break_duration: int = 60
    working_days: WorkingDays = WorkingDays.MONDAY_SATURDAY
    status: ShiftStatus = ShiftStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == ShiftStatus.ACTIVE

    def to_dict(self) -> dict:
        return {
            "id": self.shift_id,
            "name": self.name,
            "entry_time": format_hhmm(self.entry_time),
            "exit_time": format_hhmm(self.exit_time),
            "break_start": format_hhmm(self.break_start),
            "break_end": format_hhmm(self.break_end),
            "break_duration": self.break_duration,
            "working_days": self.working_days.value,
            "status": self.status.value,
        }
