"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_GRACE_MINUTES = 5
DEFAULT_PENDING_WINDOW_MINUTES = 60
DEFAULT_LATE_PENALTY_EVERY = 3
DEFAULT_LEAVE_BALANCE = 12
DEFAULT_ENTRY_TIME = "09:00"
DEFAULT_EXIT_TIME = "18:00"
DEFAULT_BREAK_START = "13:00"
DEFAULT_BREAK_END = "14:00"
DEFAULT_BREAK_DURATION = 60
DEFAULT_TIMEZONE = "Asia/Karachi"
EMPLOYEE_CODE_PREFIX = "EMP"
