from __future__ import annotations

from typing import Mapping, Optional

from ..core.constants import (
    DEFAULT_OVERTIME_MULTIPLIER,
    DEFAULT_SALARY_COMPONENTS,
    DEFAULT_STAFF_HOURLY_RATE,
    ESI_WAGE_CEILING,
    STANDARD_HOURS_PER_DAY,
    STANDARD_WORKING_DAYS_PER_MONTH,
)
from ..employees.model import Employee, SalaryDetails, SalaryStructure, StatutoryInfo


def default_salary_structure(monthly_salary: float, components: Mapping[str, float]) -> SalaryStructure:
    """Split a monthly CTC into the configured components; the rest is special allowance."""
    basic = monthly_salary * float(components["basic_percentage"]) / 100
    hra = monthly_salary * float(components["hra_percentage"]) / 100
    conveyance = float(components["conveyance_allowance"])
    medical = float(components["medical_allowance"])
    special = monthly_salary - basic - hra - conveyance - medical
    return SalaryStructure(
        basic_pay=round(basic, 2),
        hra=round(hra, 2),
        conveyance_allowance=conveyance,
        medical_allowance=medical,
        special_allowance=round(max(0.0, special), 2),
    )


def default_statutory_info(monthly_salary: float) -> StatutoryInfo:
    return StatutoryInfo(
        pf_applicable=True,
        esi_applicable=monthly_salary <= ESI_WAGE_CEILING,
        pt_applicable=True,
    )


def hourly_rate_for(employee: Employee, *, default_hourly_rate: float = DEFAULT_STAFF_HOURLY_RATE) -> float:
    if employee.hourly_rate:
        return float(employee.hourly_rate)
    if employee.is_officer:
        monthly = (employee.annual_salary or 0) / 12
        return monthly / STANDARD_WORKING_DAYS_PER_MONTH / STANDARD_HOURS_PER_DAY
    return float(default_hourly_rate)


def resolve_salary_details(
    employee: Employee,
    *,
    monthly_salary: float,
    salary_components: Optional[Mapping[str, float]] = None,
    overtime_multiplier: float = DEFAULT_OVERTIME_MULTIPLIER,
    default_hourly_rate: float = DEFAULT_STAFF_HOURLY_RATE,
) -> SalaryDetails:
    """monthly_salary is the payroll calculator's figure for this employee."""
    components = dict(DEFAULT_SALARY_COMPONENTS)
    components.update(salary_components or {})

    hourly = hourly_rate_for(employee, default_hourly_rate=default_hourly_rate)
    monthly = float(monthly_salary)
    annual = monthly * 12

    return SalaryDetails(
        employee_id=employee.employee_id,
        employee_class=employee.employee_class,
        annual_salary=annual,
        monthly_salary=monthly,
        salary_structure=employee.salary_structure or default_salary_structure(monthly, components),
        statutory_info=employee.statutory_info or default_statutory_info(monthly),
        designation=employee.designation,
        hourly_rate=hourly,
        overtime_multiplier=float(employee.overtime_rate_multiplier or overtime_multiplier),
    )
