from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import month_bounds, parse_hhmm
from ..common.results import FetchResult
from ..common.validators import require_month_year, require_non_empty
from ..core.constants import PRESENT_STATUSES
from ..core.enums import EmployeeClass
from ..core.exceptions import ConflictError, DataSourceError, ValidationError
from ..employees.model import Employee
from ..employees.service import UNKNOWN_NAME, EmployeeService
from .flags import is_late, missed_checkout
from .model import AttendanceLedgerRow, AttendanceMonthTotals, DailyAttendanceRecord
from .repository import AttendanceRepository

log = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, employees: EmployeeService):
        self._attendance = attendance
        self._employees = employees

    def get_attendance_days(self, employee: Employee, month: int, year: int) -> AttendanceMonthTotals:
        month, year = require_month_year(month, year)
        start, end = month_bounds(year, month)
        rows = self._attendance.list_for_employee(
            employee_class=employee.employee_class,
            ledger_ref=employee.ledger_ref,
            start=start,
            end=end,
        )

        dates: set[date] = set()
        hours = 0.0
        overtime = 0.0
        days_present = 0
        for r in rows:
            if r.status not in PRESENT_STATUSES:
                continue
            days_present += 1
            dates.add(r.work_date)
            hours += r.total_hours_worked or 0
            overtime += r.overtime_hours or 0

        return AttendanceMonthTotals(
            days_present=days_present,
            attendance_dates=frozenset(dates),
            total_hours=hours,
            total_overtime_hours=overtime,
        )

    def fetch_daily_attendance(self, start: date, end: date) -> FetchResult[list[DailyAttendanceRecord]]:
        """Both ledgers merged, newest first, with names and flags resolved.

        A failing ledger (or name lookup) degrades the result instead of
        discarding what the other ledger returned.
        """
        if end < start:
            raise ValidationError("end must not be before start")

        errors: list[str] = []
        records: list[DailyAttendanceRecord] = []

        try:
            officer_rows = list(self._attendance.list_range(employee_class=EmployeeClass.OFFICER, start=start, end=end))
        except DataSourceError as e:
            log.warning("officer attendance unavailable: %s", e)
            errors.append(f"officer attendance: {e}")
            officer_rows = []

        try:
            staff_rows = list(self._attendance.list_range(employee_class=EmployeeClass.STAFF, start=start, end=end))
        except DataSourceError as e:
            log.warning("staff attendance unavailable: %s", e)
            errors.append(f"staff attendance: {e}")
            staff_rows = []

        officers: dict[str, Employee] = {}
        names: dict[str, str] = {}
        try:
            if officer_rows:
                officers = self._employees.officers_by_ledger_ref(r.ledger_ref for r in officer_rows)
            if staff_rows:
                names = self._employees.names_by_user_id(r.ledger_ref for r in staff_rows)
        except DataSourceError as e:
            log.warning("employee names unavailable: %s", e)
            errors.append(f"employee directory: {e}")

        for r in officer_rows:
            officer = officers.get(r.ledger_ref)
            records.append(
                self._to_record(
                    r,
                    employee_id=officer.employee_id if officer else r.ledger_ref,
                    name=officer.name if officer else UNKNOWN_NAME,
                )
            )
        for r in staff_rows:
            records.append(self._to_record(r, employee_id=r.ledger_ref, name=names.get(r.ledger_ref, UNKNOWN_NAME)))

        records.sort(key=lambda rec: rec.work_date, reverse=True)
        if errors:
            return FetchResult(data=records, degraded=True, error="; ".join(errors))
        return FetchResult.ok(records)

    @staticmethod
    def _to_record(row: AttendanceLedgerRow, *, employee_id: str, name: str) -> DailyAttendanceRecord:
        return DailyAttendanceRecord(
            record_id=row.record_id,
            employee_id=employee_id,
            employee_name=name,
            employee_class=row.employee_class,
            work_date=row.work_date,
            check_in_time=row.check_in_time,
            check_out_time=row.check_out_time,
            check_in_address=row.check_in_address,
            check_out_address=row.check_out_address,
            total_hours_worked=max(0.0, row.total_hours_worked or 0),
            overtime_hours=max(0.0, row.overtime_hours or 0),
            status=row.status,
            is_late=is_late(row.check_in_time),
            missed_checkout=missed_checkout(row.check_in_time, row.check_out_time, row.status),
            is_uninformed_absence=False,
            notes=row.notes,
        )

    def create_attendance_record(
        self,
        employee_id: str,
        employee_class: EmployeeClass,
        work_date: date,
        status: str,
        check_in: Optional[str] = None,
        check_out: Optional[str] = None,
        notes: Optional[str] = None,
        institution_id: Optional[str] = None,
    ) -> bool:
        """Manual admin entry for a day with no row.

        Returns False when the officer record is missing or a row for that
        employee and date already exists.
        """
        employee_id = require_non_empty(employee_id, "employee_id")
        status = require_non_empty(status, "status")
        employee_class = EmployeeClass(employee_class)

        check_in_dt = self._combine(work_date, check_in, "check_in")
        check_out_dt = self._combine(work_date, check_out, "check_out")

        total_hours = 0.0
        if check_in_dt and check_out_dt:
            total_hours = round(max(0.0, (check_out_dt - check_in_dt).total_seconds() / 3600), 2)

        ledger_ref = employee_id
        if employee_class is EmployeeClass.OFFICER:
            officer = self._employees.find_officer_by_user_id(employee_id)
            if not officer:
                log.warning("officer not found for user %s", employee_id)
                return False
            ledger_ref = officer.ledger_ref
            institution_id = institution_id or officer.institution_id

        try:
            self._attendance.insert(
                employee_class=employee_class,
                ledger_ref=ledger_ref,
                work_date=work_date,
                status=status,
                check_in_time=check_in_dt,
                check_out_time=check_out_dt,
                total_hours_worked=total_hours,
                notes=(notes or "").strip() or None,
                institution_id=institution_id,
            )
        except ConflictError as e:
            log.warning("attendance row rejected for %s on %s: %s", employee_id, work_date, e)
            return False
        return True

    @staticmethod
    def _combine(work_date: date, value: Optional[str], field_name: str) -> Optional[datetime]:
        v = (value or "").strip()
        if not v:
            return None
        try:
            return datetime.combine(work_date, parse_hhmm(v))
        except ValueError:
            raise ValidationError(f"{field_name} must be HH:MM")
