from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional, Protocol, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_iso_datetime(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid ISO datetime: {value!r}")


def parse_hhmm(value: Union[str, time]) -> time:
    """Parse an "HH:MM" wall-clock string (24h) into a time."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    try:
        return datetime.strptime((value or "").strip(), "%H:%M").time()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def minutes_since_midnight(value: Union[str, time]) -> int:
    t = parse_hhmm(value)
    return t.hour * 60 + t.minute


def at_minutes(day: date, minutes: int) -> datetime:
    """Instant `minutes` after local midnight of `day` (may roll past midnight)."""
    return datetime.combine(day, time(0, 0)) + timedelta(minutes=minutes)


def month_bounds(day: date) -> tuple[date, date]:
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def load_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {name!r}")


def to_local(instant: datetime, tz: Optional[ZoneInfo]) -> datetime:
    """Normalize an instant into naive local wall-clock time.

    Aware instants are converted into `tz`; naive ones are taken as already local.
    Sub-second precision is dropped to match the DATETIME columns.
    """
    if instant.tzinfo is None or tz is None:
        return instant.replace(tzinfo=None, microsecond=0)
    return instant.astimezone(tz).replace(tzinfo=None, microsecond=0)


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Wall clock in an explicit timezone."""

    def __init__(self, tz: ZoneInfo):
        self._tz = tz

    def now(self) -> datetime:
        return datetime.now(self._tz)


@dataclass
class FixedClock:
    """Clock frozen at a given instant; tests move it with `advance`."""

    current: datetime

    def now(self) -> datetime:
        return self.current

    def advance(self, **delta) -> None:
        self.current = self.current + timedelta(**delta)
