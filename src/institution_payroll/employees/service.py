from __future__ import annotations

from typing import Iterable

from ..core.exceptions import NotFoundError
from .model import Employee
from .repository import EmployeeRepository

UNKNOWN_NAME = "Unknown"


class EmployeeService:
    """Read-only employee directory over the officer and staff tables."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_payroll_employees(self) -> list[Employee]:
        """Active officers first, then staff.

        Staff who are also officers are listed once (as officers) and CEO
        profiles are left out.
        """
        officers = list(self._employees.list_active_officers())
        seen = {o.employee_id for o in officers}

        out = list(officers)
        for s in self._employees.list_positioned_staff():
            if s.employee_id in seen or s.is_ceo:
                continue
            seen.add(s.employee_id)
            out.append(s)
        return out

    def get_employee(self, employee_id: str) -> Employee:
        officer = self._employees.find_officer_by_user_id(employee_id)
        if officer:
            return officer
        staff = self._employees.find_staff(employee_id)
        if staff:
            return staff
        raise NotFoundError(f"Employee {employee_id} not found")

    def find_officer_by_user_id(self, user_id: str):
        return self._employees.find_officer_by_user_id(user_id)

    def officers_by_ledger_ref(self, officer_ids: Iterable[str]) -> dict[str, Employee]:
        return {o.ledger_ref: o for o in self._employees.get_officers_by_ids(list(officer_ids))}

    def names_by_user_id(self, user_ids: Iterable[str]) -> dict[str, str]:
        return self._employees.get_profile_names(list(user_ids))
