from __future__ import annotations

from datetime import date

from ..common.datetime_utils import iter_days, month_bounds
from ..common.validators import require_month_year
from ..core.enums import RequestStatus
from .model import LeaveCoverage
from .repository import LeaveRepository


class LeaveService:
    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def get_approved_leave(self, employee_id: str, month: int, year: int) -> LeaveCoverage:
        """Approved leave dates inside the month, each span clamped to the month."""
        month, year = require_month_year(month, year)
        month_start, month_end = month_bounds(year, month)

        dates: set[date] = set()
        for app in self._leaves.list_approved_overlapping(applicant_id=employee_id, start=month_start, end=month_end):
            if app.status is not RequestStatus.APPROVED:
                continue
            start = max(app.start_date, month_start)
            end = min(app.end_date, month_end)
            dates.update(iter_days(start, end))

        return LeaveCoverage(leave_day_count=len(dates), leave_dates=frozenset(dates))
