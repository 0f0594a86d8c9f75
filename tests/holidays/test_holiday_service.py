from __future__ import annotations

from datetime import date

import pytest

from institution_payroll.core.enums import EmployeeTypeFilter
from institution_payroll.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def seeded(repos):
    repos.holidays.add_company(name="Republic Day", day=date(2024, 1, 26))
    repos.holidays.add_company(name="Labour Day", day=date(2024, 5, 1))
    repos.holidays.add_institution(institution_id="inst-1", name="Founders Day", day=date(2024, 1, 26))
    repos.holidays.add_institution(institution_id="inst-1", name="Sports Day", day=date(2024, 1, 12))
    repos.holidays.add_institution(institution_id="inst-2", name="Annual Day", day=date(2024, 1, 19))
    return repos


def test_company_name_wins_on_shared_date(container, seeded):
    merged = container.holiday_service.get_holidays(1, 2024, "inst-1")
    assert merged == {
        date(2024, 1, 26): "Republic Day",
        date(2024, 1, 12): "Sports Day",
    }


def test_without_institution_only_company_holidays(container, seeded):
    assert container.holiday_service.get_holidays(1, 2024) == {date(2024, 1, 26): "Republic Day"}


def test_filter_variants(container, seeded):
    svc = container.holiday_service
    staff = svc.get_holidays_for_filter(1, 2024, EmployeeTypeFilter.STAFF)
    officer = svc.get_holidays_for_filter(1, 2024, EmployeeTypeFilter.OFFICER)
    everyone = svc.get_holidays_for_filter(1, 2024, EmployeeTypeFilter.ALL)

    assert staff == {date(2024, 1, 26): "Republic Day"}
    assert set(officer) == {date(2024, 1, 12), date(2024, 1, 19), date(2024, 1, 26)}
    assert officer[date(2024, 1, 26)] == "Founders Day"
    assert everyone[date(2024, 1, 26)] == "Republic Day"
    assert len(everyone) == 3


def test_add_requires_name_and_institution(container):
    svc = container.holiday_service
    with pytest.raises(ValidationError):
        svc.add_company_holiday(name=" ", day=date(2024, 1, 1))
    with pytest.raises(ValidationError):
        svc.add_institution_holiday(institution_id="", name="Day", day=date(2024, 1, 1))


def test_delete_missing_holiday(container, seeded):
    svc = container.holiday_service
    hid = svc.list_company_holidays(2024)[0].holiday_id
    svc.delete_company_holiday(hid)
    with pytest.raises(NotFoundError):
        svc.delete_company_holiday(hid)
    with pytest.raises(NotFoundError):
        svc.delete_institution_holiday("nope")
