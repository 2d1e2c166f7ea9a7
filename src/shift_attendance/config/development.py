import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shift_attendance"),
}

# Token printed on the office QR poster
QR_TOKEN = os.getenv("QR_TOKEN", "OFFICE_CHECKIN_SYSTEM")

TIMEZONE = os.getenv("TIMEZONE", "Asia/Karachi")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

GRACE_MINUTES = int(os.getenv("GRACE_MINUTES", "5"))
PENDING_WINDOW_MINUTES = int(os.getenv("PENDING_WINDOW_MINUTES", "60"))
LATE_PENALTY_EVERY = int(os.getenv("LATE_PENALTY_EVERY", "3"))
ALLOW_NEGATIVE_BALANCE = bool(int(os.getenv("ALLOW_NEGATIVE_BALANCE", "1")))
DEFAULT_ENTRY_TIME = os.getenv("DEFAULT_ENTRY_TIME", "09:00")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the demo admin and shift on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
