from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from ...employees.model import Employee


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def monthly_salary(self, employee: Employee) -> float:
        raise NotImplementedError

    @abstractmethod
    def per_day_salary(self, monthly_salary: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def prorated_gross(self, monthly_salary: float, join_date: Optional[date], year: int, month: int) -> float:
        raise NotImplementedError

    @abstractmethod
    def lop_deduction(self, per_day_salary: float, days: float) -> float:
        raise NotImplementedError
