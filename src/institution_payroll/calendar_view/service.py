from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Optional

from ..attendance.model import DailyAttendanceRecord
from ..attendance.service import AttendanceService
from ..common.datetime_utils import is_weekend, iter_days, month_bounds, today_local
from ..common.results import FetchResult
from ..common.validators import require_month_year
from ..core.constants import PRESENT_STATUSES
from ..core.enums import AttendanceStatus, EmployeeTypeFilter
from ..core.exceptions import DataSourceError
from ..holidays.service import HolidayService
from ..payroll.service import PayrollService
from .model import AttendanceCounts, CalendarDayData

log = logging.getLogger(__name__)


def count_day(
    records: list[DailyAttendanceRecord],
    *,
    population: int,
    counts_absence: bool,
) -> AttendanceCounts:
    present = sum(1 for r in records if r.status in PRESENT_STATUSES)
    leave = sum(1 for r in records if r.status == AttendanceStatus.LEAVE.value)
    return AttendanceCounts(
        present=present,
        absent=max(0, population - present - leave) if counts_absence else 0,
        late=sum(1 for r in records if r.is_late),
        leave=leave,
        no_pay=sum(1 for r in records if r.status == AttendanceStatus.NO_PAY.value),
    )


class CalendarService:
    """Month grid of attendance counts. Derived on every call, never stored."""

    def __init__(self, attendance: AttendanceService, holidays: HolidayService, payroll: PayrollService):
        self._attendance = attendance
        self._holidays = holidays
        self._payroll = payroll

    def build_calendar(
        self,
        month: int,
        year: int,
        employee_filter: EmployeeTypeFilter = EmployeeTypeFilter.ALL,
        today: Optional[date] = None,
    ) -> FetchResult[list[CalendarDayData]]:
        month, year = require_month_year(month, year)
        employee_filter = EmployeeTypeFilter(employee_filter)
        today = today or today_local()
        start, end = month_bounds(year, month)
        errors: list[str] = []

        fetched = self._attendance.fetch_daily_attendance(start, end)
        if fetched.degraded and fetched.error:
            errors.append(fetched.error)
        by_day: dict[date, list[DailyAttendanceRecord]] = defaultdict(list)
        for r in fetched.data:
            if employee_filter.matches(r.employee_class):
                by_day[r.work_date].append(r)

        try:
            holidays = self._holidays.get_holidays_for_filter(month, year, employee_filter)
        except DataSourceError as e:
            log.warning("holidays unavailable for calendar: %s", e)
            errors.append(f"holidays: {e}")
            holidays = {}

        batch = self._payroll.fetch_all_employees(month, year, today=today)
        if batch.degraded:
            errors.append(batch.error or f"{len(batch.failures)} employee(s) could not be computed")
        population = sum(1 for s in batch.summaries if employee_filter.matches(s.employee_class))

        days: list[CalendarDayData] = []
        for d in iter_days(start, end):
            weekend = is_weekend(d)
            holiday = d in holidays
            future = d > today
            records = by_day.get(d, [])
            days.append(
                CalendarDayData(
                    day=d,
                    day_of_month=d.day,
                    is_weekend=weekend,
                    is_holiday=holiday,
                    holiday_name=holidays.get(d),
                    is_today=d == today,
                    is_future=future,
                    attendance=count_day(
                        records,
                        population=population,
                        counts_absence=not (weekend or holiday or future),
                    ),
                    records=records,
                )
            )

        if errors:
            return FetchResult(data=days, degraded=True, error="; ".join(errors))
        return FetchResult.ok(days)
