from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import date, datetime
from types import SimpleNamespace
from typing import Optional

import pytest

from institution_payroll.attendance.model import AttendanceLedgerRow
from institution_payroll.calendar_days.model import CalendarDayTypeEntry
from institution_payroll.container import wire_services
from institution_payroll.core.enums import (
    EmployeeClass,
    PayrollStatus,
    RequestStatus,
)
from institution_payroll.core.exceptions import ConflictError, DataSourceError
from institution_payroll.employees.model import Employee
from institution_payroll.holidays.model import Holiday
from institution_payroll.leave.model import LeaveApplication
from institution_payroll.overtime.model import OvertimeRequest
from institution_payroll.payroll.model import PayrollRecord

_ids = itertools.count(1)


def _next_id(prefix: str) -> str:
    return f"{prefix}-{next(_ids)}"


class FakeDayTypeRepo:
    def __init__(self):
        self.entries: dict[tuple, CalendarDayTypeEntry] = {}

    def list_entries(self, *, scope, institution_id, start, end):
        return [
            e
            for (s, inst, d), e in sorted(self.entries.items(), key=lambda kv: kv[0][2])
            if s is scope and inst == institution_id and start <= d <= end
        ]

    def upsert(self, *, scope, institution_id, day, day_type, description=None):
        self.entries[(scope, institution_id, day)] = CalendarDayTypeEntry(
            entry_id=_next_id("dt"),
            scope=scope,
            institution_id=institution_id,
            day=day,
            day_type=day_type,
            description=description,
        )

    def replace_many(self, *, scope, institution_id, entries):
        for e in entries:
            self.entries.pop((scope, institution_id, e.day), None)
        for e in entries:
            self.upsert(
                scope=scope,
                institution_id=institution_id,
                day=e.day,
                day_type=e.day_type,
                description=e.description,
            )
        return len(entries)

    def delete(self, *, scope, institution_id, day):
        return self.entries.pop((scope, institution_id, day), None) is not None


class FakeHolidayRepo:
    def __init__(self):
        self.company: list[Holiday] = []
        self.institution: list[Holiday] = []
        self.down = False

    def _check(self):
        if self.down:
            raise DataSourceError("holidays table unreachable")

    def list_company(self, *, year):
        self._check()
        return [h for h in self.company if h.year == year]

    def list_institution(self, *, year, institution_id=None):
        self._check()
        return [
            h
            for h in self.institution
            if h.year == year and (institution_id is None or h.institution_id == institution_id)
        ]

    def add_company(self, *, name, day, description=None):
        h = Holiday(holiday_id=_next_id("ch"), name=name, day=day, year=day.year, description=description)
        self.company.append(h)
        return h.holiday_id

    def add_institution(self, *, institution_id, name, day, description=None):
        h = Holiday(
            holiday_id=_next_id("ih"),
            name=name,
            day=day,
            year=day.year,
            institution_id=institution_id,
            description=description,
        )
        self.institution.append(h)
        return h.holiday_id

    def delete_company(self, *, holiday_id):
        before = len(self.company)
        self.company = [h for h in self.company if h.holiday_id != holiday_id]
        return len(self.company) < before

    def delete_institution(self, *, holiday_id):
        before = len(self.institution)
        self.institution = [h for h in self.institution if h.holiday_id != holiday_id]
        return len(self.institution) < before


class FakeEmployeeRepo:
    def __init__(self):
        self.officers: list[Employee] = []
        self.staff: list[Employee] = []
        self.down = False

    def add(self, employee: Employee) -> Employee:
        (self.officers if employee.is_officer else self.staff).append(employee)
        return employee

    def list_active_officers(self):
        if self.down:
            raise DataSourceError("officers table unreachable")
        return list(self.officers)

    def list_positioned_staff(self):
        if self.down:
            raise DataSourceError("profiles table unreachable")
        return list(self.staff)

    def find_officer_by_user_id(self, user_id):
        return next((o for o in self.officers if o.employee_id == user_id), None)

    def find_staff(self, user_id):
        return next((s for s in self.staff if s.employee_id == user_id), None)

    def get_officers_by_ids(self, officer_ids):
        wanted = set(officer_ids)
        return [o for o in self.officers if o.ledger_ref in wanted]

    def get_profile_names(self, user_ids):
        everyone = {e.employee_id: e.name for e in self.officers + self.staff}
        return {uid: everyone[uid] for uid in user_ids if uid in everyone}


class FakeAttendanceRepo:
    def __init__(self):
        self.rows: list[AttendanceLedgerRow] = []
        self.down_ledgers: set[EmployeeClass] = set()
        self.broken_refs: set[str] = set()

    def add(self, employee: Employee, day: date, status: str = "checked_out", **kwargs) -> AttendanceLedgerRow:
        row = AttendanceLedgerRow(
            record_id=_next_id("att"),
            ledger_ref=employee.ledger_ref,
            employee_class=employee.employee_class,
            work_date=day,
            status=status,
            **kwargs,
        )
        self.rows.append(row)
        return row

    def list_for_employee(self, *, employee_class, ledger_ref, start, end):
        if ledger_ref in self.broken_refs:
            raise DataSourceError(f"attendance for {ledger_ref} unreachable")
        return [
            r
            for r in self.rows
            if r.employee_class is employee_class and r.ledger_ref == ledger_ref and start <= r.work_date <= end
        ]

    def list_range(self, *, employee_class, start, end):
        if employee_class in self.down_ledgers:
            raise DataSourceError(f"{employee_class.value} ledger unreachable")
        rows = [r for r in self.rows if r.employee_class is employee_class and start <= r.work_date <= end]
        return sorted(rows, key=lambda r: r.work_date, reverse=True)

    def insert(
        self,
        *,
        employee_class,
        ledger_ref,
        work_date,
        status,
        check_in_time=None,
        check_out_time=None,
        total_hours_worked=0.0,
        notes=None,
        institution_id=None,
    ):
        for r in self.rows:
            if r.employee_class is employee_class and r.ledger_ref == ledger_ref and r.work_date == work_date:
                raise ConflictError("Duplicate entry")
        row = AttendanceLedgerRow(
            record_id=_next_id("att"),
            ledger_ref=ledger_ref,
            employee_class=employee_class,
            work_date=work_date,
            status=status,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            total_hours_worked=total_hours_worked,
            notes=notes,
        )
        self.rows.append(row)
        return row.record_id


class FakeLeaveRepo:
    def __init__(self):
        self.applications: list[LeaveApplication] = []

    def add(self, applicant_id: str, start: date, end: date, status=RequestStatus.APPROVED) -> LeaveApplication:
        app = LeaveApplication(
            application_id=_next_id("lv"),
            applicant_id=applicant_id,
            start_date=start,
            end_date=end,
            status=status,
        )
        self.applications.append(app)
        return app

    def list_approved_overlapping(self, *, applicant_id, start, end):
        return [
            a
            for a in self.applications
            if a.applicant_id == applicant_id
            and a.status is RequestStatus.APPROVED
            and a.start_date <= end
            and a.end_date >= start
        ]


class FakeOvertimeRepo:
    def __init__(self):
        self.requests: dict[str, OvertimeRequest] = {}
        self.down = False

    def create(self, *, employee_id, employee_class, work_date, requested_hours, reason, calculated_pay):
        rid = _next_id("ot")
        self.requests[rid] = OvertimeRequest(
            request_id=rid,
            employee_id=employee_id,
            employee_class=employee_class,
            work_date=work_date,
            requested_hours=requested_hours,
            reason=reason,
            status=RequestStatus.PENDING,
            calculated_pay=calculated_pay,
            created_at=datetime(2024, 1, 1, 10, 0),
        )
        return rid

    def get(self, *, request_id):
        return self.requests.get(request_id)

    def list_by_status(self, *, status=None, limit=500):
        if self.down:
            raise DataSourceError("overtime table unreachable")
        return [r for r in self.requests.values() if status is None or r.status is status][:limit]

    def decide(self, *, request_id, status, approver_id, approver_name, decided_at, rejection_reason=None):
        req = self.requests.get(request_id)
        if req is None or req.status is not RequestStatus.PENDING:
            return False
        self.requests[request_id] = replace(
            req,
            status=status,
            approved_by=approver_id,
            approved_by_name=approver_name,
            approved_at=decided_at,
            rejection_reason=rejection_reason,
        )
        return True

    def pending_totals(self):
        if self.down:
            raise DataSourceError("overtime table unreachable")
        pending = [r for r in self.requests.values() if r.status is RequestStatus.PENDING]
        return len(pending), float(sum(r.requested_hours for r in pending))


_LOCKED = (PayrollStatus.APPROVED, PayrollStatus.PAID)


class FakePayrollRepo:
    def __init__(self):
        self.records: dict[tuple, PayrollRecord] = {}
        self.down = False

    def _existing(self, employee_id, month, year) -> Optional[PayrollRecord]:
        existing = self.records.get((employee_id, int(month), int(year)))
        if existing and existing.status in _LOCKED:
            raise ConflictError(f"Payroll for {employee_id} is already {existing.status.value}")
        return existing

    def lop_overrides(self, *, month, year):
        if self.down:
            raise DataSourceError("payroll_records unreachable")
        return {
            emp: r.days_lop
            for (emp, m, y), r in self.records.items()
            if m == month and y == year and r.lop_overridden
        }

    def get_lop_override(self, *, employee_id, month, year):
        r = self.records.get((employee_id, month, year))
        return r.days_lop if r and r.lop_overridden else None

    def upsert_generated(self, draft):
        existing = self._existing(draft.employee_id, draft.month, draft.year)
        record = PayrollRecord(
            record_id=existing.record_id if existing else _next_id("pr"),
            employee_id=draft.employee_id,
            employee_class=draft.employee_class,
            month=draft.month,
            year=draft.year,
            working_days=draft.working_days,
            days_present=draft.days_present,
            days_leave=draft.days_leave,
            days_lop=draft.days_lop,
            lop_overridden=draft.lop_overridden,
            uninformed_leave_days=draft.uninformed_leave_days,
            overtime_hours=draft.overtime_hours,
            monthly_salary=draft.monthly_salary,
            per_day_salary=draft.per_day_salary,
            lop_deduction=draft.lop_deduction,
            gross_salary=draft.gross_salary,
            total_deductions=draft.total_deductions,
            net_pay=draft.net_pay,
            deduction_basis=draft.deduction_basis,
            status=existing.status if existing else PayrollStatus.DRAFT,
        )
        self.records[(draft.employee_id, draft.month, draft.year)] = record
        return record.record_id

    def get_record(self, *, record_id):
        return next((r for r in self.records.values() if r.record_id == record_id), None)

    def list_records(self, *, month=None, year=None, status=None, limit=500):
        if self.down:
            raise DataSourceError("payroll_records unreachable")
        return [
            r
            for r in self.records.values()
            if (month is None or r.month == month)
            and (year is None or r.year == year)
            and (status is None or r.status is status)
        ][:limit]

    def update_status(self, *, record_id, from_status, to_status):
        for key, r in self.records.items():
            if r.record_id == record_id and r.status is from_status:
                self.records[key] = replace(r, status=to_status)
                return True
        return False


def make_officer(employee_id="u-off-1", *, ledger_ref=None, institution_id="inst-1", **kwargs) -> Employee:
    kwargs.setdefault("name", "Officer One")
    kwargs.setdefault("annual_salary", 360000.0)
    return Employee(
        employee_id=employee_id,
        employee_class=EmployeeClass.OFFICER,
        ledger_ref=ledger_ref or f"off-{employee_id}",
        institution_id=institution_id,
        **kwargs,
    )


def make_staff(employee_id="u-staff-1", **kwargs) -> Employee:
    kwargs.setdefault("name", "Staff One")
    return Employee(
        employee_id=employee_id,
        employee_class=EmployeeClass.STAFF,
        ledger_ref=employee_id,
        **kwargs,
    )


@pytest.fixture
def repos():
    return SimpleNamespace(
        day_types=FakeDayTypeRepo(),
        holidays=FakeHolidayRepo(),
        employees=FakeEmployeeRepo(),
        attendance=FakeAttendanceRepo(),
        leave=FakeLeaveRepo(),
        overtime=FakeOvertimeRepo(),
        payroll=FakePayrollRepo(),
    )


@pytest.fixture
def container(repos):
    return wire_services(**vars(repos), settings={"PAYROLL_WORKERS": 4})


@pytest.fixture
def officer_factory():
    return make_officer


@pytest.fixture
def staff_factory():
    return make_staff
