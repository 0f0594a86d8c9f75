from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Callable, Mapping, Optional, TypeVar

from ..attendance.service import AttendanceService
from ..common.datetime_utils import today_local
from ..common.results import EmployeeFailure, FetchResult
from ..common.validators import require_month_year, require_non_empty
from ..core.constants import DEFAULT_OVERTIME_MULTIPLIER, DEFAULT_PAYROLL_WORKERS, DEFAULT_STAFF_HOURLY_RATE
from ..core.enums import CalendarScope, DeductionBasis, PayrollStatus
from ..core.exceptions import ConflictError, DataSourceError, DomainError, NotFoundError, ValidationError
from ..employees.model import Employee, SalaryDetails
from ..employees.service import EmployeeService
from ..holidays.service import HolidayService
from ..leave.service import LeaveService
from ..overtime.service import OvertimeService
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .computation import compute_payroll_summary
from .model import (
    EmployeePayrollSummary,
    GeneratedPayroll,
    PayrollBatchResult,
    PayrollDashboardStats,
    PayrollGenerationReport,
    PayrollRecord,
    PayrollRecordDraft,
)
from .repository import PayrollRepository
from .salary import resolve_salary_details
from .working_days import WorkingDayDeriver

log = logging.getLogger(__name__)

T = TypeVar("T")

# One step forward at a time.
_NEXT_STATUS = {
    PayrollStatus.DRAFT: PayrollStatus.PENDING,
    PayrollStatus.PENDING: PayrollStatus.APPROVED,
    PayrollStatus.APPROVED: PayrollStatus.PAID,
}

_NO_OVERRIDE = object()

MAX_LOP_DAYS = 31


class PayrollService:
    def __init__(
        self,
        employees: EmployeeService,
        attendance: AttendanceService,
        leave: LeaveService,
        holidays: HolidayService,
        working_days: WorkingDayDeriver,
        payroll: PayrollRepository,
        *,
        overtime: Optional[OvertimeService] = None,
        calculator: Optional[PayrollCalculator] = None,
        max_workers: int = DEFAULT_PAYROLL_WORKERS,
        salary_components: Optional[Mapping[str, float]] = None,
        overtime_multiplier: float = DEFAULT_OVERTIME_MULTIPLIER,
        default_hourly_rate: float = DEFAULT_STAFF_HOURLY_RATE,
    ):
        self._employees = employees
        self._attendance = attendance
        self._leave = leave
        self._holidays = holidays
        self._working_days = working_days
        self._payroll = payroll
        self._overtime = overtime
        self._calculator = calculator or StandardPayrollCalculator(default_hourly_rate=default_hourly_rate)
        self._max_workers = max(1, int(max_workers))
        self._salary_components = dict(salary_components or {})
        self._overtime_multiplier = float(overtime_multiplier)
        self._default_hourly_rate = float(default_hourly_rate)

    # ---- single employee ----
    def compute_summary(
        self,
        employee: Employee,
        month: int,
        year: int,
        today: Optional[date] = None,
        lop_override=_NO_OVERRIDE,
    ) -> EmployeePayrollSummary:
        month, year = require_month_year(month, year)

        if employee.is_officer:
            scope, institution_id = CalendarScope.INSTITUTION, employee.institution_id
        else:
            scope, institution_id = CalendarScope.COMPANY, None

        working = self._working_days.get_working_days(
            year,
            month,
            from_date=employee.join_date,
            scope=scope,
            institution_id=institution_id,
            today=today,
        )
        holidays = self._holidays.get_holidays(month, year, institution_id)
        attendance = self._attendance.get_attendance_days(employee, month, year)
        leave = self._leave.get_approved_leave(employee.employee_id, month, year)

        if lop_override is _NO_OVERRIDE:
            lop_override = self._payroll.get_lop_override(employee_id=employee.employee_id, month=month, year=year)

        return compute_payroll_summary(
            employee=employee,
            month=month,
            year=year,
            working_days=working,
            holidays=set(holidays),
            attendance=attendance,
            leave=leave,
            lop_override=lop_override,
            calculator=self._calculator,
        )

    def detect_uninformed_leave(
        self,
        employee_id: str,
        month: int,
        year: int,
        today: Optional[date] = None,
    ) -> list[date]:
        """Working dates with no attendance, no approved leave and no holiday."""
        employee = self._employees.get_employee(employee_id)
        return list(self.compute_summary(employee, month, year, today=today).not_marked_dates)

    def get_salary_details(self, employee_id: str) -> SalaryDetails:
        employee = self._employees.get_employee(require_non_empty(employee_id, "employee_id"))
        return resolve_salary_details(
            employee,
            monthly_salary=self._calculator.monthly_salary(employee),
            salary_components=self._salary_components,
            overtime_multiplier=self._overtime_multiplier,
            default_hourly_rate=self._default_hourly_rate,
        )

    # ---- batch ----
    def _fan_out(
        self,
        employees: list[Employee],
        work: Callable[[Employee], T],
    ) -> tuple[list[tuple[Employee, T]], list[EmployeeFailure]]:
        """Run work per employee on a bounded pool; input order is kept.

        A failing employee is recorded and the rest carry on.
        """
        done: list[tuple[Employee, T]] = []
        failures: list[EmployeeFailure] = []
        if not employees:
            return done, failures

        workers = min(self._max_workers, len(employees))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="payroll") as pool:
            futures = [(e, pool.submit(work, e)) for e in employees]
            for employee, future in futures:
                try:
                    done.append((employee, future.result()))
                except DomainError as e:
                    log.warning("payroll skipped for %s: %s", employee.employee_id, e)
                    failures.append(EmployeeFailure(employee_id=employee.employee_id, reason=str(e)))
                except Exception as e:
                    log.exception("payroll failed for %s", employee.employee_id)
                    failures.append(EmployeeFailure(employee_id=employee.employee_id, reason=repr(e)))
        return done, failures

    def fetch_all_employees(
        self,
        month: Optional[int] = None,
        year: Optional[int] = None,
        today: Optional[date] = None,
    ) -> PayrollBatchResult:
        today = today or today_local()
        month, year = require_month_year(month or today.month, year or today.year)

        try:
            employees = self._employees.list_payroll_employees()
        except DataSourceError as e:
            log.error("employee directory unavailable: %s", e)
            return PayrollBatchResult(error=str(e))

        error = None
        try:
            overrides = self._payroll.lop_overrides(month=month, year=year)
        except DataSourceError as e:
            log.warning("LOP overrides unavailable, using unmarked days: %s", e)
            overrides = {}
            error = f"lop overrides: {e}"

        done, failures = self._fan_out(
            employees,
            lambda emp: self.compute_summary(emp, month, year, today=today, lop_override=overrides.get(emp.employee_id)),
        )
        return PayrollBatchResult(summaries=[s for _, s in done], failures=failures, error=error)

    # ---- persistence ----
    def _persist(self, summary: EmployeePayrollSummary) -> str:
        draft = PayrollRecordDraft(
            employee_id=summary.employee_id,
            employee_class=summary.employee_class,
            month=summary.month,
            year=summary.year,
            working_days=summary.working_days,
            days_present=summary.days_present,
            days_leave=summary.days_leave,
            days_lop=summary.days_lop,
            uninformed_leave_days=summary.days_not_marked,
            overtime_hours=summary.overtime_hours,
            monthly_salary=summary.monthly_salary,
            per_day_salary=summary.per_day_salary,
            lop_deduction=summary.total_deductions,
            gross_salary=summary.gross_salary,
            total_deductions=summary.total_deductions,
            net_pay=summary.net_pay,
            deduction_basis=summary.deduction_basis,
            lop_overridden=summary.deduction_basis is DeductionBasis.HR_OVERRIDE,
        )
        return self._payroll.upsert_generated(draft)

    def generate_monthly_payroll(
        self,
        employee_id: str,
        month: int,
        year: int,
        today: Optional[date] = None,
    ) -> str:
        month, year = require_month_year(month, year)
        employee = self._employees.get_employee(require_non_empty(employee_id, "employee_id"))
        record_id = self._persist(self.compute_summary(employee, month, year, today=today))
        log.info("payroll generated for %s %02d/%d (record=%s)", employee.employee_id, month, year, record_id)
        return record_id

    def generate_payroll_for_all(
        self,
        month: int,
        year: int,
        today: Optional[date] = None,
    ) -> PayrollGenerationReport:
        month, year = require_month_year(month, year)
        employees = self._employees.list_payroll_employees()

        done, failures = self._fan_out(
            employees,
            lambda emp: self._persist(self.compute_summary(emp, month, year, today=today)),
        )
        generated = [GeneratedPayroll(employee_id=e.employee_id, record_id=rid) for e, rid in done]
        log.info("payroll run %02d/%d: %d generated, %d failed", month, year, len(generated), len(failures))
        return PayrollGenerationReport(month=month, year=year, generated=generated, failures=failures)

    def fetch_payroll_records(
        self,
        month: Optional[int] = None,
        year: Optional[int] = None,
        status: Optional[PayrollStatus] = None,
    ) -> FetchResult[list[PayrollRecord]]:
        status = PayrollStatus(status) if status else None
        try:
            return FetchResult.ok(list(self._payroll.list_records(month=month, year=year, status=status)))
        except DataSourceError as e:
            log.warning("payroll records unavailable: %s", e)
            return FetchResult.failed([], str(e))

    def update_payroll_status(self, record_id: str, new_status: PayrollStatus) -> PayrollStatus:
        try:
            new_status = PayrollStatus(new_status)
        except ValueError:
            raise ValidationError(f"Unknown payroll status: {new_status}")

        record = self._payroll.get_record(record_id=record_id)
        if record is None:
            raise NotFoundError("Payroll record not found")

        expected = _NEXT_STATUS.get(record.status)
        if expected is not new_status:
            raise ConflictError(f"Cannot move payroll from {record.status.value} to {new_status.value}")

        if not self._payroll.update_status(record_id=record_id, from_status=record.status, to_status=new_status):
            raise ConflictError("Payroll record changed concurrently, reload and retry")
        log.info("payroll %s: %s -> %s", record_id, record.status.value, new_status.value)
        return new_status

    def set_days_lop(
        self,
        employee_id: str,
        month: int,
        year: int,
        days_lop,
        today: Optional[date] = None,
    ) -> str:
        """HR override: from now on days_lop drives the deduction instead of unmarked days.

        The month is recomputed with the override and the whole record is
        written, so stored totals always match the stored basis.
        """
        month, year = require_month_year(month, year)
        try:
            days = float(days_lop)
        except (TypeError, ValueError):
            raise ValidationError("days_lop must be a number")
        if days < 0 or days > MAX_LOP_DAYS:
            raise ValidationError(f"days_lop must be between 0 and {MAX_LOP_DAYS}")

        employee = self._employees.get_employee(require_non_empty(employee_id, "employee_id"))
        summary = self.compute_summary(employee, month, year, today=today, lop_override=days)
        record_id = self._persist(summary)
        log.info("LOP override for %s %02d/%d: %s day(s) (record=%s)", employee.employee_id, month, year, days, record_id)
        return record_id

    # ---- dashboard ----
    def dashboard_stats(self, month: int, year: int, today: Optional[date] = None) -> PayrollDashboardStats:
        month, year = require_month_year(month, year)
        batch = self.fetch_all_employees(month, year, today=today)
        degraded = batch.degraded

        pending_ot, ot_hours = 0, 0.0
        if self._overtime is not None:
            try:
                pending_ot, ot_hours = self._overtime.pending_totals()
            except DataSourceError as e:
                log.warning("overtime totals unavailable: %s", e)
                degraded = True

        pending_records = self.fetch_payroll_records(month, year, PayrollStatus.PENDING)
        degraded = degraded or pending_records.degraded

        return PayrollDashboardStats(
            month=month,
            year=year,
            total_employees=len(batch.summaries),
            total_payroll_cost=sum(s.net_pay for s in batch.summaries),
            total_lop_deductions=sum(s.total_deductions for s in batch.summaries),
            pending_overtime_requests=pending_ot,
            total_overtime_hours=ot_hours,
            pending_payroll_count=len(pending_records.data),
            uninformed_leave_count=sum(s.days_not_marked for s in batch.summaries),
            degraded=degraded,
        )
