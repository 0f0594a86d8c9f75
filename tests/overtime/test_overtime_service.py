from __future__ import annotations

from datetime import date

import pytest

from institution_payroll.core.enums import RequestStatus
from institution_payroll.core.exceptions import ConflictError, NotFoundError, ValidationError


@pytest.fixture
def staff(repos, staff_factory):
    return repos.employees.add(staff_factory("u-staff-1", name="Lan", hourly_rate=400.0))


def test_create_computes_pay_from_hourly_rate(repos, container, staff):
    rid = container.overtime_service.create_request(staff.employee_id, date(2024, 1, 6), 2, "Inventory count")
    req = repos.overtime.get(request_id=rid)
    assert req.status is RequestStatus.PENDING
    assert req.calculated_pay == 2 * 400 * 1.5


def test_employee_multiplier_wins_over_default(repos, container, staff_factory):
    emp = repos.employees.add(staff_factory("u-staff-2", hourly_rate=100.0, overtime_rate_multiplier=2.0))
    rid = container.overtime_service.create_request(emp.employee_id, date(2024, 1, 6), 3, "Audit")
    assert repos.overtime.get(request_id=rid).calculated_pay == 600


@pytest.mark.parametrize("hours", [0, -1, 25, "abc"])
def test_create_rejects_bad_hours(container, staff, hours):
    with pytest.raises(ValidationError):
        container.overtime_service.create_request(staff.employee_id, date(2024, 1, 6), hours, "Audit")


def test_create_requires_reason(container, staff):
    with pytest.raises(ValidationError):
        container.overtime_service.create_request(staff.employee_id, date(2024, 1, 6), 2, "   ")


def test_create_for_unknown_employee(container):
    with pytest.raises(NotFoundError):
        container.overtime_service.create_request("ghost", date(2024, 1, 6), 2, "Audit")


def test_second_decision_is_a_conflict(repos, container, staff):
    svc = container.overtime_service
    rid = svc.create_request(staff.employee_id, date(2024, 1, 6), 2, "Audit")

    svc.approve(rid, "admin-1", "Admin")
    req = repos.overtime.get(request_id=rid)
    assert req.status is RequestStatus.APPROVED
    assert req.approved_by == "admin-1"
    assert req.approved_at is not None

    with pytest.raises(ConflictError):
        svc.approve(rid, "admin-2", "Other admin")
    with pytest.raises(ConflictError):
        svc.reject(rid, "admin-2", "Other admin", "too late")


def test_decision_on_unknown_request(container):
    with pytest.raises(NotFoundError):
        container.overtime_service.approve("ot-missing", "admin-1", "Admin")


def test_reject_without_reason_leaves_request_pending(repos, container, staff):
    svc = container.overtime_service
    rid = svc.create_request(staff.employee_id, date(2024, 1, 6), 2, "Audit")

    with pytest.raises(ValidationError):
        svc.reject(rid, "admin-1", "Admin", "")
    assert repos.overtime.get(request_id=rid).status is RequestStatus.PENDING

    svc.reject(rid, "admin-1", "Admin", "Not budgeted")
    req = repos.overtime.get(request_id=rid)
    assert req.status is RequestStatus.REJECTED
    assert req.rejection_reason == "Not budgeted"


def test_list_resolves_names_and_filters(container, staff):
    svc = container.overtime_service
    first = svc.create_request(staff.employee_id, date(2024, 1, 6), 2, "Audit")
    svc.create_request(staff.employee_id, date(2024, 1, 7), 1, "Audit")
    svc.approve(first, "admin-1", "Admin")

    pending = svc.list_requests(RequestStatus.PENDING)
    assert not pending.degraded
    assert [r.employee_name for r in pending.data] == ["Lan"]
    assert len(svc.list_requests().data) == 2
    assert svc.pending_totals() == (1, 1.0)


def test_list_degrades_when_store_is_down(repos, container):
    repos.overtime.down = True
    result = container.overtime_service.list_requests()
    assert result.degraded
    assert result.data == []
