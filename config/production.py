import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "crew_payroll"),
}

DAILY_OVERTIME_THRESHOLD = os.getenv("DAILY_OVERTIME_THRESHOLD", "8.0")
WEEK_STARTS_ON = int(os.getenv("WEEK_STARTS_ON", "6"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG = False
