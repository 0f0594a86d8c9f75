from __future__ import annotations

from datetime import date

from institution_payroll.common.datetime_utils import coerce_date
from institution_payroll.core.enums import EmployeeClass
from institution_payroll.employees.mysql_employee_repository import _officer_from_row, _staff_from_row

AFTER_JANUARY = date(2024, 2, 15)


def _officer_row(**overrides):
    row = {
        "id": "off-9",
        "user_id": "u-off-9",
        "full_name": "Officer Nine",
        "email": "nine@example.com",
        "annual_salary": "360000",
        "assigned_institutions": '["inst-1", "inst-2"]',
        "join_date": "2023-06-01",
    }
    row.update(overrides)
    return row


def test_coerce_date_accepts_driver_values_and_drops_garbage():
    assert coerce_date("2024-01-16") == date(2024, 1, 16)
    assert coerce_date("2024-01-16T10:00:00") == date(2024, 1, 16)
    assert coerce_date("2024-13-45") is None
    assert coerce_date("not a date") is None
    assert coerce_date("") is None


def test_officer_row_maps_first_institution_and_ledger_ref():
    officer = _officer_from_row(_officer_row())
    assert officer.employee_id == "u-off-9"
    assert officer.ledger_ref == "off-9"
    assert officer.institution_id == "inst-1"
    assert officer.annual_salary == 360000
    assert officer.join_date == date(2023, 6, 1)


def test_malformed_join_date_counts_as_joined_before_the_month(repos, container):
    officer = repos.employees.add(_officer_from_row(_officer_row(join_date="2024-13-45")))
    assert officer.join_date is None

    s = container.payroll_service.compute_summary(officer, 1, 2024, today=AFTER_JANUARY)
    assert s.gross_salary == s.monthly_salary == 30000
    assert s.working_days == 23


def test_staff_row_with_bad_join_date_is_not_prorated(repos, container):
    staff = repos.employees.add(
        _staff_from_row({"id": "u-staff-7", "name": "Staff Seven", "hourly_rate": "400", "join_date": "31/01/2024"})
    )
    assert staff.employee_class is EmployeeClass.STAFF
    assert staff.join_date is None

    s = container.payroll_service.compute_summary(staff, 1, 2024, today=AFTER_JANUARY)
    assert s.gross_salary == s.monthly_salary == 400 * 8 * 22
