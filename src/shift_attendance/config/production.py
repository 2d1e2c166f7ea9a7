import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_attendance"),
}

QR_TOKEN = os.getenv("QR_TOKEN", "OFFICE_CHECKIN_SYSTEM")

TIMEZONE = os.getenv("TIMEZONE", "Asia/Karachi")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

GRACE_MINUTES = int(os.getenv("GRACE_MINUTES", "5"))
PENDING_WINDOW_MINUTES = int(os.getenv("PENDING_WINDOW_MINUTES", "60"))
LATE_PENALTY_EVERY = int(os.getenv("LATE_PENALTY_EVERY", "3"))
ALLOW_NEGATIVE_BALANCE = bool(int(os.getenv("ALLOW_NEGATIVE_BALANCE", "1")))
DEFAULT_ENTRY_TIME = os.getenv("DEFAULT_ENTRY_TIME", "09:00")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
