from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..common.validators import require_month_year, require_non_empty
from ..core.enums import EmployeeTypeFilter
from ..core.exceptions import NotFoundError
from .model import Holiday
from .repository import HolidayRepository


def _merge_into(target: dict[date, str], holidays: Iterable[Holiday], month: int) -> None:
    # First writer wins: a date already named keeps its name.
    for h in holidays:
        if h.day.month == month and h.day not in target:
            target[h.day] = h.name


class HolidayService:
    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def get_holidays(self, month: int, year: int, institution_id: Optional[str] = None) -> dict[date, str]:
        """Company holidays of the month, plus the institution's when one is given.

        On a shared date the company name is kept.
        """
        month, year = require_month_year(month, year)
        out: dict[date, str] = {}
        _merge_into(out, self._holidays.list_company(year=year), month)
        if institution_id:
            _merge_into(out, self._holidays.list_institution(year=year, institution_id=institution_id), month)
        return out

    def get_holidays_for_filter(
        self,
        month: int,
        year: int,
        employee_filter: EmployeeTypeFilter = EmployeeTypeFilter.ALL,
    ) -> dict[date, str]:
        month, year = require_month_year(month, year)
        employee_filter = EmployeeTypeFilter(employee_filter)
        out: dict[date, str] = {}

        if employee_filter is EmployeeTypeFilter.STAFF:
            _merge_into(out, self._holidays.list_company(year=year), month)
        elif employee_filter is EmployeeTypeFilter.OFFICER:
            _merge_into(out, self._holidays.list_institution(year=year), month)
        else:
            _merge_into(out, self._holidays.list_company(year=year), month)
            _merge_into(out, self._holidays.list_institution(year=year), month)
        return out

    # ---- maintenance ----
    def list_company_holidays(self, year: int) -> list[Holiday]:
        return list(self._holidays.list_company(year=int(year)))

    def list_institution_holidays(self, institution_id: str, year: int) -> list[Holiday]:
        institution_id = require_non_empty(institution_id, "institution_id")
        return list(self._holidays.list_institution(year=int(year), institution_id=institution_id))

    def add_company_holiday(self, *, name: str, day: date, description: Optional[str] = None) -> str:
        name = require_non_empty(name, "name")
        return self._holidays.add_company(name=name, day=day, description=(description or "").strip() or None)

    def add_institution_holiday(
        self,
        *,
        institution_id: str,
        name: str,
        day: date,
        description: Optional[str] = None,
    ) -> str:
        institution_id = require_non_empty(institution_id, "institution_id")
        name = require_non_empty(name, "name")
        return self._holidays.add_institution(
            institution_id=institution_id,
            name=name,
            day=day,
            description=(description or "").strip() or None,
        )

    def delete_company_holiday(self, holiday_id: str) -> None:
        if not self._holidays.delete_company(holiday_id=holiday_id):
            raise NotFoundError("Company holiday not found")

    def delete_institution_holiday(self, holiday_id: str) -> None:
        if not self._holidays.delete_institution(holiday_id=holiday_id):
            raise NotFoundError("Institution holiday not found")
