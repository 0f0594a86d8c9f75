import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "institution_payroll_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

PAYROLL_WORKERS = 4
OVERTIME_MULTIPLIER = 1.5
DEFAULT_STAFF_HOURLY_RATE = 500.0

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
