from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role used for authorization checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Status stored on an attendance record."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    LEAVE = "leave"


class DisplayStatus(str, Enum):
    """Dashboard-only status; PENDING is never persisted."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    LEAVE = "leave"
    PENDING = "pending"


class Dressing(str, Enum):
    FORMAL = "formal"
    CASUAL = "casual"
    NONE = "none"


class LeaveBucket(str, Enum):
    CASUAL = "casual"
    ANNUAL = "annual"


class WorkingDays(str, Enum):
    MONDAY_SATURDAY = "monday-saturday"
    MONDAY_FRIDAY = "monday-friday"


class ShiftStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
