from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from typing import Optional
from zoneinfo import ZoneInfo

from ..core import constants
from ..common.datetime_utils import parse_hhmm
from ..leaves.ledger import LatePenaltyPolicy


@dataclass(frozen=True)
class AttendancePolicy:
    """Tunable knobs of the attendance engine, built from settings by the container."""

    grace_minutes: int = constants.DEFAULT_GRACE_MINUTES
    pending_window_minutes: int = constants.DEFAULT_PENDING_WINDOW_MINUTES
    penalty: LatePenaltyPolicy = field(default_factory=LatePenaltyPolicy)
    default_entry_time: time = field(default_factory=lambda: parse_hhmm(constants.DEFAULT_ENTRY_TIME))
    timezone: Optional[ZoneInfo] = None
