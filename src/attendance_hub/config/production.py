import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_hub"),
}

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))

CHECKIN_CUTOFF = os.getenv("CHECKIN_CUTOFF", "09:00")
REMINDER_AFTER = os.getenv("REMINDER_AFTER", "08:30")
TRUST_CLIENT_STATUS = bool(int(os.getenv("TRUST_CLIENT_STATUS", "0")))
HISTORY_LIMIT = int(os.getenv("HISTORY_LIMIT", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "logs/attendance_hub.log")
