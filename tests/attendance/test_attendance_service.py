from __future__ import annotations

from datetime import date, datetime

import pytest

from institution_payroll.attendance.flags import is_late, missed_checkout
from institution_payroll.core.enums import EmployeeClass
from institution_payroll.core.exceptions import ValidationError


@pytest.fixture
def people(repos, officer_factory, staff_factory):
    officer = repos.employees.add(officer_factory("u-off-1", name="Minh"))
    staff = repos.employees.add(staff_factory("u-staff-1", name="Lan"))
    return officer, staff


def test_only_present_statuses_count(repos, container, people):
    officer, _ = people
    repos.attendance.add(officer, date(2024, 1, 2), total_hours_worked=8, overtime_hours=1.5)
    repos.attendance.add(officer, date(2024, 1, 3), status="checked_in", total_hours_worked=4)
    repos.attendance.add(officer, date(2024, 1, 4), status="leave")
    repos.attendance.add(officer, date(2024, 2, 1))

    totals = container.attendance_service.get_attendance_days(officer, 1, 2024)

    assert totals.days_present == 2
    assert totals.attendance_dates == frozenset({date(2024, 1, 2), date(2024, 1, 3)})
    assert totals.total_hours == 12
    assert totals.total_overtime_hours == 1.5


def test_daily_feed_merges_both_ledgers_newest_first(repos, container, people):
    officer, staff = people
    repos.attendance.add(officer, date(2024, 1, 2), check_in_time=datetime(2024, 1, 2, 9, 45))
    repos.attendance.add(staff, date(2024, 1, 3), check_in_time=datetime(2024, 1, 3, 9, 0))

    result = container.attendance_service.fetch_daily_attendance(date(2024, 1, 1), date(2024, 1, 31))

    assert not result.degraded
    assert [(r.employee_id, r.employee_name) for r in result.data] == [("u-staff-1", "Lan"), ("u-off-1", "Minh")]
    assert result.data[1].is_late is True
    assert result.data[0].is_late is False
    assert all(r.is_uninformed_absence is False for r in result.data)


def test_daily_feed_keeps_the_ledger_that_answered(repos, container, people):
    officer, staff = people
    repos.attendance.add(officer, date(2024, 1, 2))
    repos.attendance.add(staff, date(2024, 1, 3))
    repos.attendance.down_ledgers.add(EmployeeClass.STAFF)

    result = container.attendance_service.fetch_daily_attendance(date(2024, 1, 1), date(2024, 1, 31))

    assert result.degraded
    assert "staff" in result.error
    assert [r.employee_id for r in result.data] == ["u-off-1"]


def test_daily_feed_rejects_inverted_range(container):
    with pytest.raises(ValidationError):
        container.attendance_service.fetch_daily_attendance(date(2024, 1, 5), date(2024, 1, 1))


def test_manual_entry_for_officer_uses_officer_ledger(repos, container, people):
    officer, _ = people
    created = container.attendance_service.create_attendance_record(
        officer.employee_id, EmployeeClass.OFFICER, date(2024, 1, 8), "present", check_in="09:00", check_out="17:30"
    )

    assert created is True
    row = repos.attendance.rows[-1]
    assert row.ledger_ref == officer.ledger_ref
    assert row.total_hours_worked == 8.5
    assert row.check_in_time == datetime(2024, 1, 8, 9, 0)


def test_manual_entry_returns_false_for_missing_officer_or_duplicate(container, people):
    _, staff = people
    svc = container.attendance_service
    assert svc.create_attendance_record("ghost", EmployeeClass.OFFICER, date(2024, 1, 8), "present") is False

    assert svc.create_attendance_record(staff.employee_id, EmployeeClass.STAFF, date(2024, 1, 8), "present") is True
    assert svc.create_attendance_record(staff.employee_id, EmployeeClass.STAFF, date(2024, 1, 8), "present") is False


def test_manual_entry_rejects_bad_time(container, people):
    _, staff = people
    with pytest.raises(ValidationError):
        container.attendance_service.create_attendance_record(
            staff.employee_id, EmployeeClass.STAFF, date(2024, 1, 8), "present", check_in="9am"
        )


@pytest.mark.parametrize(
    "check_in, expected",
    [
        (None, False),
        (datetime(2024, 1, 2, 9, 30), False),
        (datetime(2024, 1, 2, 9, 31), True),
        (datetime(2024, 1, 2, 10, 0), True),
        (datetime(2024, 1, 2, 8, 59), False),
    ],
)
def test_late_after_half_past_nine(check_in, expected):
    assert is_late(check_in) is expected


def test_missed_checkout_ignores_open_days():
    morning = datetime(2024, 1, 2, 9, 0)
    assert missed_checkout(morning, None, "checked_out") is True
    assert missed_checkout(morning, None, "checked_in") is False
    assert missed_checkout(morning, datetime(2024, 1, 2, 17, 0), "checked_out") is False
    assert missed_checkout(None, None, "absent") is False
