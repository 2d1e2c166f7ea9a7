from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, StatusDecision


class PresentStrategy(CheckInStrategy):
    """Check-in within the grace window."""

    def decide_checkin(self, *, instant: datetime, entry_at: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
