from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import is_weekend, iter_days, month_bounds
from ..common.validators import require_month_year
from ..core.enums import CalendarScope, DayType
from ..core.exceptions import ValidationError
from .model import DayTypeAssignment, NonWorkingDays
from .repository import CalendarDayTypeRepository

log = logging.getLogger(__name__)


class CalendarDayTypeService:
    """Manual working/weekend/holiday overrides per scope.

    Company rows never carry an institution id; institution rows always do.
    """

    def __init__(self, day_types: CalendarDayTypeRepository):
        self._day_types = day_types

    @staticmethod
    def _scope_key(scope: CalendarScope, institution_id: Optional[str], *, for_write: bool) -> Optional[str]:
        scope = CalendarScope(scope)
        if scope is CalendarScope.COMPANY:
            return None
        institution_id = (institution_id or "").strip() or None
        if institution_id is None and for_write:
            raise ValidationError("institution_id is required for the institution calendar")
        return institution_id

    # ---- reads ----
    def get_day_types(
        self,
        scope: CalendarScope,
        start: date,
        end: date,
        institution_id: Optional[str] = None,
    ) -> dict[date, DayType]:
        scope = CalendarScope(scope)
        key = self._scope_key(scope, institution_id, for_write=False)
        if scope is CalendarScope.INSTITUTION and key is None:
            return {}
        entries = self._day_types.list_entries(scope=scope, institution_id=key, start=start, end=end)
        return {e.day: e.day_type for e in entries}

    def get_day_types_for_month(
        self,
        scope: CalendarScope,
        year: int,
        month: int,
        institution_id: Optional[str] = None,
    ) -> dict[date, DayType]:
        month, year = require_month_year(month, year)
        start, end = month_bounds(year, month)
        return self.get_day_types(scope, start, end, institution_id)

    def get_working_days_from_calendar(
        self,
        scope: CalendarScope,
        year: int,
        month: int,
        institution_id: Optional[str] = None,
    ) -> list[date]:
        types = self.get_day_types_for_month(scope, year, month, institution_id)
        return sorted(d for d, t in types.items() if t is DayType.WORKING)

    def get_holidays_for_year(
        self,
        scope: CalendarScope,
        year: int,
        institution_id: Optional[str] = None,
    ) -> list[tuple[date, str]]:
        scope = CalendarScope(scope)
        key = self._scope_key(scope, institution_id, for_write=False)
        if scope is CalendarScope.INSTITUTION and key is None:
            return []
        entries = self._day_types.list_entries(
            scope=scope,
            institution_id=key,
            start=date(year, 1, 1),
            end=date(year, 12, 31),
        )
        return [(e.day, e.description or "Holiday") for e in entries if e.day_type is DayType.HOLIDAY]

    def get_non_working_days_in_range(
        self,
        scope: CalendarScope,
        start: date,
        end: date,
        institution_id: Optional[str] = None,
    ) -> NonWorkingDays:
        types = self.get_day_types(scope, start, end, institution_id)
        weekends = sorted(d for d, t in types.items() if t is DayType.WEEKEND)
        holidays = sorted(d for d, t in types.items() if t is DayType.HOLIDAY)
        return NonWorkingDays(weekends=weekends, holidays=holidays)

    # ---- writes ----
    def set_day_type(
        self,
        scope: CalendarScope,
        day: date,
        day_type: DayType,
        institution_id: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        scope = CalendarScope(scope)
        key = self._scope_key(scope, institution_id, for_write=True)
        self._day_types.upsert(
            scope=scope,
            institution_id=key,
            day=day,
            day_type=DayType(day_type),
            description=(description or "").strip() or None,
        )

    def bulk_set_day_types(
        self,
        scope: CalendarScope,
        entries: Iterable[DayTypeAssignment],
        institution_id: Optional[str] = None,
    ) -> int:
        scope = CalendarScope(scope)
        key = self._scope_key(scope, institution_id, for_write=True)

        # Later duplicates win, one row per date.
        by_day: dict[date, DayTypeAssignment] = {}
        for e in entries:
            by_day[e.day] = DayTypeAssignment(
                day=e.day,
                day_type=DayType(e.day_type),
                description=(e.description or "").strip() or None,
            )
        if not by_day:
            return 0

        ordered = [by_day[d] for d in sorted(by_day)]
        count = self._day_types.replace_many(scope=scope, institution_id=key, entries=ordered)
        log.info("replaced %d day types (scope=%s institution=%s)", count, scope.value, key)
        return count

    def delete_day_type(
        self,
        scope: CalendarScope,
        day: date,
        institution_id: Optional[str] = None,
    ) -> bool:
        scope = CalendarScope(scope)
        key = self._scope_key(scope, institution_id, for_write=True)
        return self._day_types.delete(scope=scope, institution_id=key, day=day)

    def quick_setup_month(
        self,
        scope: CalendarScope,
        year: int,
        month: int,
        institution_id: Optional[str] = None,
    ) -> int:
        """Mark Saturday/Sunday as weekend and every other date as working."""
        month, year = require_month_year(month, year)
        start, end = month_bounds(year, month)
        entries = [
            DayTypeAssignment(day=d, day_type=DayType.WEEKEND if is_weekend(d) else DayType.WORKING)
            for d in iter_days(start, end)
        ]
        return self.bulk_set_day_types(scope, entries, institution_id)
