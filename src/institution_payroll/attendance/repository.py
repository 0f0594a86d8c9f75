from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeClass
from .model import AttendanceLedgerRow


class AttendanceRepository(Protocol):
    def list_for_employee(
        self,
        *,
        employee_class: EmployeeClass,
        ledger_ref: str,
        start: date,
        end: date,
    ) -> Sequence[AttendanceLedgerRow]:
        raise NotImplementedError

    def list_range(self, *, employee_class: EmployeeClass, start: date, end: date) -> Sequence[AttendanceLedgerRow]:
        """All rows of one ledger between start and end (inclusive), newest first."""

        raise NotImplementedError

    def insert(
        self,
        *,
        employee_class: EmployeeClass,
        ledger_ref: str,
        work_date: date,
        status: str,
        check_in_time: Optional[datetime] = None,
        check_out_time: Optional[datetime] = None,
        total_hours_worked: float = 0.0,
        notes: Optional[str] = None,
        institution_id: Optional[str] = None,
    ) -> str:
        """Insert one row; a duplicate (employee, date) raises ConflictError."""

        raise NotImplementedError
