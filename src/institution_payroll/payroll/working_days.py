from __future__ import annotations

from datetime import date
from typing import Optional

from ..calendar_days.service import CalendarDayTypeService
from ..common.datetime_utils import is_weekend, iter_days, month_bounds, today_local
from ..common.validators import require_month_year
from ..core.enums import CalendarScope, DayType


class WorkingDayDeriver:
    """Working dates of a month up to today.

    Any registry entry for the scope and month makes the registry the only
    source for that month; otherwise Monday to Friday are working days.
    """

    def __init__(self, day_types: CalendarDayTypeService):
        self._day_types = day_types

    def get_working_days(
        self,
        year: int,
        month: int,
        from_date: Optional[date] = None,
        scope: CalendarScope = CalendarScope.COMPANY,
        institution_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> list[date]:
        month, year = require_month_year(month, year)
        today = today or today_local()
        month_start, month_end = month_bounds(year, month)
        last = min(month_end, today)
        if last < month_start:
            return []

        registry = self._day_types.get_day_types_for_month(scope, year, month, institution_id)

        out: list[date] = []
        for d in iter_days(month_start, last):
            if from_date and d < from_date:
                continue
            if registry:
                if registry.get(d) is DayType.WORKING:
                    out.append(d)
            elif not is_weekend(d):
                out.append(d)
        return out
