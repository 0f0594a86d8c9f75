from __future__ import annotations

from datetime import date
from typing import Optional

from ...common.datetime_utils import month_bounds
from ...core.constants import (
    DEFAULT_STAFF_HOURLY_RATE,
    STANDARD_DAYS_PER_MONTH,
    STANDARD_HOURS_PER_DAY,
    STANDARD_WORKING_DAYS_PER_MONTH,
)
from ...employees.model import Employee
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: per-day pay is monthly / 30 whatever the month length.

    Officers earn annual_salary / 12. Staff earn hourly_rate x 8h x 22 days.
    """

    def __init__(self, *, default_hourly_rate: float = DEFAULT_STAFF_HOURLY_RATE):
        self._default_hourly_rate = float(default_hourly_rate)

    def monthly_salary(self, employee: Employee) -> float:
        if employee.is_officer:
            return (employee.annual_salary or 0) / 12
        rate = employee.hourly_rate or self._default_hourly_rate
        return rate * STANDARD_HOURS_PER_DAY * STANDARD_WORKING_DAYS_PER_MONTH

    def per_day_salary(self, monthly_salary: float) -> float:
        return monthly_salary / STANDARD_DAYS_PER_MONTH

    def prorated_gross(self, monthly_salary: float, join_date: Optional[date], year: int, month: int) -> float:
        if join_date is None:
            return monthly_salary

        month_start, month_end = month_bounds(year, month)
        if join_date > month_end:
            return 0.0
        if join_date > month_start:
            days_remaining = month_end.day - join_date.day + 1
            return self.per_day_salary(monthly_salary) * days_remaining
        return monthly_salary

    def lop_deduction(self, per_day_salary: float, days: float) -> float:
        return per_day_salary * max(0.0, float(days))
