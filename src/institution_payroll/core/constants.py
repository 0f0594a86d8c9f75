"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import AttendanceStatus

# Payroll policy: per-day salary is always monthly / 30, whatever the month length.
STANDARD_DAYS_PER_MONTH = 30

# Check-in strictly after 09:30 local time counts as late.
LATE_AFTER_HOUR = 9
LATE_AFTER_MINUTE = 30

PRESENT_STATUSES = frozenset(
    {
        AttendanceStatus.CHECKED_OUT.value,
        AttendanceStatus.CHECKED_IN.value,
        AttendanceStatus.PRESENT.value,
    }
)

# Staff without an annual salary are paid from an hourly rate.
DEFAULT_STAFF_HOURLY_RATE = 500
STANDARD_HOURS_PER_DAY = 8
STANDARD_WORKING_DAYS_PER_MONTH = 22

DEFAULT_OVERTIME_MULTIPLIER = 1.5
MAX_OVERTIME_HOURS_PER_DAY = 24

DEFAULT_PAYROLL_WORKERS = 8

DEFAULT_SALARY_COMPONENTS = {
    "basic_percentage": 50.0,
    "hra_percentage": 20.0,
    "conveyance_allowance": 1600.0,
    "medical_allowance": 1250.0,
}

# ESI applies only up to this monthly gross.
ESI_WAGE_CEILING = 21000
