from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.results import EmployeeFailure
from ..core.enums import DeductionBasis, EmployeeClass, PayrollStatus


@dataclass(frozen=True)
class EmployeePayrollSummary:
    employee_id: str
    employee_class: EmployeeClass
    name: str
    month: int
    year: int
    monthly_salary: float
    per_day_salary: float
    days_present: int
    days_not_marked: int
    days_leave: int
    days_lop: float
    overtime_hours: float
    total_hours_worked: float
    working_days: int
    gross_salary: float
    total_deductions: float
    net_pay: float
    deduction_basis: DeductionBasis = DeductionBasis.NOT_MARKED
    payroll_status: PayrollStatus = PayrollStatus.DRAFT
    email: Optional[str] = None
    institution_id: Optional[str] = None
    department: Optional[str] = None
    position_name: Optional[str] = None
    join_date: Optional[date] = None
    not_marked_dates: tuple[date, ...] = ()

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "employee_class": self.employee_class.value,
            "name": self.name,
            "email": self.email,
            "institution_id": self.institution_id,
            "department": self.department,
            "position_name": self.position_name,
            "join_date": self.join_date.isoformat() if self.join_date else None,
            "month": self.month,
            "year": self.year,
            "monthly_salary": round(self.monthly_salary, 2),
            "per_day_salary": round(self.per_day_salary, 2),
            "days_present": self.days_present,
            "days_not_marked": self.days_not_marked,
            "days_leave": self.days_leave,
            "days_lop": self.days_lop,
            "overtime_hours": self.overtime_hours,
            "total_hours_worked": round(self.total_hours_worked, 2),
            "working_days": self.working_days,
            "gross_salary": round(self.gross_salary, 2),
            "total_deductions": round(self.total_deductions, 2),
            "net_pay": round(self.net_pay, 2),
            "deduction_basis": self.deduction_basis.value,
            "payroll_status": self.payroll_status.value,
        }


@dataclass(frozen=True)
class PayrollBatchResult:
    summaries: list[EmployeePayrollSummary] = field(default_factory=list)
    failures: list[EmployeeFailure] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return bool(self.failures) or self.error is not None


@dataclass(frozen=True)
class GeneratedPayroll:
    employee_id: str
    record_id: str


@dataclass(frozen=True)
class PayrollGenerationReport:
    month: int
    year: int
    generated: list[GeneratedPayroll] = field(default_factory=list)
    failures: list[EmployeeFailure] = field(default_factory=list)


@dataclass(frozen=True)
class PayrollRecordDraft:
    """Values written by a generate run, keyed by (employee, month, year)."""

    employee_id: str
    employee_class: EmployeeClass
    month: int
    year: int
    working_days: int
    days_present: int
    days_leave: int
    days_lop: float
    uninformed_leave_days: int
    overtime_hours: float
    monthly_salary: float
    per_day_salary: float
    lop_deduction: float
    gross_salary: float
    total_deductions: float
    net_pay: float
    deduction_basis: DeductionBasis
    lop_overridden: bool = False


@dataclass(frozen=True)
class PayrollRecord:
    record_id: str
    employee_id: str
    employee_class: EmployeeClass
    month: int
    year: int
    working_days: int
    days_present: int
    days_leave: int
    days_lop: float
    lop_overridden: bool
    uninformed_leave_days: int
    overtime_hours: float
    monthly_salary: float
    per_day_salary: float
    lop_deduction: float
    gross_salary: float
    total_deductions: float
    net_pay: float
    deduction_basis: DeductionBasis
    status: PayrollStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "employee_id": self.employee_id,
            "employee_class": self.employee_class.value,
            "month": self.month,
            "year": self.year,
            "working_days": self.working_days,
            "days_present": self.days_present,
            "days_leave": self.days_leave,
            "days_lop": self.days_lop,
            "lop_overridden": self.lop_overridden,
            "uninformed_leave_days": self.uninformed_leave_days,
            "overtime_hours": self.overtime_hours,
            "monthly_salary": self.monthly_salary,
            "per_day_salary": self.per_day_salary,
            "lop_deduction": self.lop_deduction,
            "gross_salary": self.gross_salary,
            "total_deductions": self.total_deductions,
            "net_pay": self.net_pay,
            "deduction_basis": self.deduction_basis.value,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class PayrollDashboardStats:
    month: int
    year: int
    total_employees: int = 0
    total_payroll_cost: float = 0.0
    total_lop_deductions: float = 0.0
    pending_overtime_requests: int = 0
    total_overtime_hours: float = 0.0
    pending_payroll_count: int = 0
    uninformed_leave_count: int = 0
    degraded: bool = False

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "year": self.year,
            "total_employees": self.total_employees,
            "total_payroll_cost": round(self.total_payroll_cost, 2),
            "total_lop_deductions": round(self.total_lop_deductions, 2),
            "pending_overtime_requests": self.pending_overtime_requests,
            "total_overtime_hours": self.total_overtime_hours,
            "pending_payroll_count": self.pending_payroll_count,
            "uninformed_leave_count": self.uninformed_leave_count,
            "degraded": self.degraded,
        }
