import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_hub"),
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed the default administrator on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "1")))

# Attendance rules (HH:MM, server local time)
CHECKIN_CUTOFF = os.getenv("CHECKIN_CUTOFF", "09:00")
REMINDER_AFTER = os.getenv("REMINDER_AFTER", "08:30")
# 1 = persist the status reported by the client as-is
TRUST_CLIENT_STATUS = bool(int(os.getenv("TRUST_CLIENT_STATUS", "0")))
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE", "")
