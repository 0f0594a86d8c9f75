import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "institution_payroll"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Payroll engine tuning
PAYROLL_WORKERS = int(os.getenv("PAYROLL_WORKERS", "8"))
OVERTIME_MULTIPLIER = float(os.getenv("OVERTIME_MULTIPLIER", "1.5"))
DEFAULT_STAFF_HOURLY_RATE = float(os.getenv("DEFAULT_STAFF_HOURLY_RATE", "500"))

# CTC split used when an employee has no stored salary structure
SALARY_COMPONENTS = {
    "basic_percentage": float(os.getenv("SALARY_BASIC_PERCENTAGE", "50")),
    "hra_percentage": float(os.getenv("SALARY_HRA_PERCENTAGE", "20")),
    "conveyance_allowance": float(os.getenv("SALARY_CONVEYANCE_ALLOWANCE", "1600")),
    "medical_allowance": float(os.getenv("SALARY_MEDICAL_ALLOWANCE", "1250")),
}

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
