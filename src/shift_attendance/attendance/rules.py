"""Pure time rules of the attendance engine. No I/O, no clock access."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import at_minutes, minutes_since_midnight
from ..core.enums import DisplayStatus
from .model import AttendanceRecord


def grace_deadline(day: date, entry_time: time, grace_minutes: int) -> datetime:
    return at_minutes(day, minutes_since_midnight(entry_time) + int(grace_minutes))


def pending_deadline(day: date, entry_time: time, window_minutes: int) -> datetime:
    return at_minutes(day, minutes_since_midnight(entry_time) + int(window_minutes))


def classify_for_display(
    record: Optional[AttendanceRecord],
    *,
    entry_time: time,
    now: datetime,
    pending_window_minutes: int,
) -> DisplayStatus:
    """Today's dashboard status; a stored record always wins."""
    if record is not None:
        return DisplayStatus(record.status.value)
    if now < pending_deadline(now.date(), entry_time, pending_window_minutes):
        return DisplayStatus.PENDING
    return DisplayStatus.ABSENT
