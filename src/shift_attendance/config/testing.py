import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_attendance_test"),
}

QR_TOKEN = "TEST_QR_TOKEN"

TIMEZONE = "Asia/Karachi"
LOG_LEVEL = "WARNING"

GRACE_MINUTES = 5
PENDING_WINDOW_MINUTES = 60
LATE_PENALTY_EVERY = 3
ALLOW_NEGATIVE_BALANCE = True
DEFAULT_ENTRY_TIME = "09:00"

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
AUTO_SEED_DB = False
