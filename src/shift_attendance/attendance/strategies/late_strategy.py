from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, StatusDecision


class LateStrategy(CheckInStrategy):
    """Check-in after the grace window."""

    def decide_checkin(self, *, instant: datetime, entry_at: datetime) -> StatusDecision:
        minutes_late = max(int((instant - entry_at).total_seconds() // 60), 0)
        return StatusDecision(status=AttendanceStatus.LATE, minutes_late=minutes_late)
