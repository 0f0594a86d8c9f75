import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "institution_payroll"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

PAYROLL_WORKERS = int(os.getenv("PAYROLL_WORKERS", "16"))
OVERTIME_MULTIPLIER = float(os.getenv("OVERTIME_MULTIPLIER", "1.5"))
DEFAULT_STAFF_HOURLY_RATE = float(os.getenv("DEFAULT_STAFF_HOURLY_RATE", "500"))

# CTC split used when an employee has no stored salary structure
SALARY_COMPONENTS = {
    "basic_percentage": float(os.getenv("SALARY_BASIC_PERCENTAGE", "50")),
    "hra_percentage": float(os.getenv("SALARY_HRA_PERCENTAGE", "20")),
    "conveyance_allowance": float(os.getenv("SALARY_CONVEYANCE_ALLOWANCE", "1600")),
    "medical_allowance": float(os.getenv("SALARY_MEDICAL_ALLOWANCE", "1250")),
}

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
