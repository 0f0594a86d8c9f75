from __future__ import annotations

from datetime import date

import pytest

from institution_payroll.main import create_app


@pytest.fixture
def client(monkeypatch, repos, container, officer_factory, staff_factory):
    monkeypatch.setenv("APP_ENV", "testing")
    repos.employees.add(officer_factory("u-off-1", name="Minh"))
    repos.employees.add(staff_factory("u-staff-1", name="Lan", hourly_rate=400.0))
    repos.holidays.add_company(name="Republic Day", day=date(2024, 1, 26))
    app = create_app(container=container)
    return app.test_client()


def test_payroll_employees_lists_summaries(client):
    resp = client.get("/api/payroll/employees?month=1&year=2024")
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["success"] is True
    assert [row["employee_id"] for row in body["data"]] == ["u-off-1", "u-staff-1"]
    assert body["data"][0]["working_days"] == 22
    assert body["meta"]["degraded"] is False


def test_invalid_month_is_a_bad_request(client):
    resp = client.get("/api/payroll/employees?month=13&year=2024")
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_overtime_flow(client):
    bad = client.post("/api/overtime", json={"employee_id": "u-staff-1", "date": "2024-01-06", "requested_hours": 2})
    assert bad.status_code == 400

    created = client.post(
        "/api/overtime",
        json={"employee_id": "u-staff-1", "date": "2024-01-06", "requested_hours": 2, "reason": "Stocktake"},
    )
    assert created.status_code == 201
    rid = created.get_json()["data"]["id"]

    decision = {"approver_id": "admin-1", "approver_name": "Admin"}
    assert client.post(f"/api/overtime/{rid}/approve", json=decision).status_code == 200
    assert client.post(f"/api/overtime/{rid}/approve", json=decision).status_code == 409
    assert client.post("/api/overtime/missing/approve", json=decision).status_code == 404

    listed = client.get("/api/overtime?status=approved").get_json()
    assert listed["data"][0]["calculated_pay"] == 1200
    assert listed["data"][0]["employee_name"] == "Lan"


def test_generate_and_status_transitions(client):
    resp = client.post("/api/payroll/generate", json={"employee_id": "u-off-1", "month": 1, "year": 2024})
    assert resp.status_code == 201
    rid = resp.get_json()["data"]["id"]

    skip = client.post(f"/api/payroll/records/{rid}/status", json={"status": "paid"})
    assert skip.status_code == 409
    step = client.post(f"/api/payroll/records/{rid}/status", json={"status": "pending"})
    assert step.get_json()["data"]["status"] == "pending"

    records = client.get("/api/payroll/records?month=1&year=2024&status=pending").get_json()
    assert [r["id"] for r in records["data"]] == [rid]


def test_lop_override_route(client):
    resp = client.put("/api/payroll/lop", json={"employee_id": "u-off-1", "month": 1, "year": 2024, "days_lop": 40})
    assert resp.status_code == 400

    resp = client.put("/api/payroll/lop", json={"employee_id": "u-off-1", "month": 1, "year": 2024, "days_lop": 2})
    assert resp.status_code == 200
    rows = client.get("/api/payroll/employees?month=1&year=2024").get_json()["data"]
    assert rows[0]["deduction_basis"] == "hr_override"
    assert rows[0]["total_deductions"] == 2000


def test_holidays_route_merges_month(client):
    body = client.get("/api/holidays?month=1&year=2024").get_json()
    assert body["data"] == [{"date": "2024-01-26", "name": "Republic Day"}]


def test_calendar_route(client):
    body = client.get("/api/attendance/calendar?month=1&year=2024&employee_type=staff&records=0").get_json()
    assert len(body["data"]) == 31
    assert "records" not in body["data"][0]
    assert body["data"][25]["holiday_name"] == "Republic Day"

    bad = client.get("/api/attendance/calendar?month=1&year=2024&employee_type=contractor")
    assert bad.status_code == 400


def test_day_type_bulk_route(client):
    resp = client.put(
        "/api/calendar/day-types/bulk",
        json={
            "scope": "company",
            "entries": [
                {"date": "2024-01-01", "day_type": "working"},
                {"date": "2024-01-01", "day_type": "holiday"},
            ],
        },
    )
    assert resp.get_json()["data"] == {"count": 1}

    listed = client.get("/api/calendar/day-types?scope=company&month=1&year=2024").get_json()
    assert listed["data"] == [{"date": "2024-01-01", "day_type": "holiday"}]

    missing_id = client.put("/api/calendar/day-types/bulk", json={"scope": "institution", "entries": []})
    assert missing_id.status_code == 400


def test_day_type_bulk_rejects_malformed_entries(client, repos):
    resp = client.put(
        "/api/calendar/day-types/bulk",
        json={"scope": "company", "entries": [{"date": "2024-01-01", "day_type": "working"}, "2024-01-02"]},
    )
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert repos.day_types.entries == {}


def test_unknown_route_uses_json_envelope(client):
    resp = client.get("/api/nope")
    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "Not found"}
