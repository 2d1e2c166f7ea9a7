from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from .rules import grace_deadline
from .strategies.base import CheckInStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the check-in strategy from the grace rule."""

    def for_checkin(self, *, instant: datetime, entry_time: time, grace_minutes: int) -> CheckInStrategy:
        # The deadline itself still counts as on time.
        if instant <= grace_deadline(instant.date(), entry_time, grace_minutes):
            return PresentStrategy()
        return LateStrategy()
