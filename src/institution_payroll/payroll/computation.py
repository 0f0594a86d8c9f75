"""Pure monthly payroll computation for one employee.

No I/O: callers gather working days, holidays, attendance and leave first.
Same inputs always give the same summary.
"""

from __future__ import annotations

from datetime import date
from typing import AbstractSet, Iterable, Optional

from ..attendance.model import AttendanceMonthTotals
from ..core.enums import DeductionBasis, PayrollStatus
from ..employees.model import Employee
from ..leave.model import LeaveCoverage
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import EmployeePayrollSummary


def uncovered_working_days(
    working_days: Iterable[date],
    holidays: AbstractSet[date],
    attendance_dates: AbstractSet[date],
    leave_dates: AbstractSet[date],
) -> list[date]:
    """Working dates that are not holidays and have neither attendance nor leave."""
    covered = set(attendance_dates) | set(leave_dates)
    return [d for d in working_days if d not in holidays and d not in covered]


def compute_payroll_summary(
    *,
    employee: Employee,
    month: int,
    year: int,
    working_days: Iterable[date],
    holidays: AbstractSet[date],
    attendance: AttendanceMonthTotals,
    leave: LeaveCoverage,
    lop_override: Optional[float] = None,
    calculator: Optional[PayrollCalculator] = None,
    payroll_status: PayrollStatus = PayrollStatus.DRAFT,
) -> EmployeePayrollSummary:
    calculator = calculator or StandardPayrollCalculator()

    monthly = calculator.monthly_salary(employee)
    per_day = calculator.per_day_salary(monthly)
    gross = calculator.prorated_gross(monthly, employee.join_date, year, month)

    working_days = list(working_days)
    working_excl_holidays = [d for d in working_days if d not in holidays]
    not_marked = uncovered_working_days(working_excl_holidays, holidays, attendance.attendance_dates, leave.leave_dates)
    days_not_marked = len(not_marked)

    if lop_override is not None:
        days_lop = float(lop_override)
        basis = DeductionBasis.HR_OVERRIDE
        deduction = calculator.lop_deduction(per_day, days_lop)
    else:
        days_lop = 0.0
        basis = DeductionBasis.NOT_MARKED
        deduction = calculator.lop_deduction(per_day, days_not_marked)

    return EmployeePayrollSummary(
        employee_id=employee.employee_id,
        employee_class=employee.employee_class,
        name=employee.name,
        email=employee.email,
        institution_id=employee.institution_id,
        department=employee.department,
        position_name=employee.position_name,
        join_date=employee.join_date,
        month=month,
        year=year,
        monthly_salary=monthly,
        per_day_salary=per_day,
        days_present=attendance.days_present,
        days_not_marked=days_not_marked,
        days_leave=leave.leave_day_count,
        days_lop=days_lop,
        overtime_hours=attendance.total_overtime_hours,
        total_hours_worked=attendance.total_hours,
        working_days=len(working_excl_holidays),
        gross_salary=gross,
        total_deductions=deduction,
        net_pay=gross - deduction,
        deduction_basis=basis,
        payroll_status=payroll_status,
        not_marked_dates=tuple(not_marked),
    )
