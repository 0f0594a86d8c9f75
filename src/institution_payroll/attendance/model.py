from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import EmployeeClass


@dataclass(frozen=True)
class AttendanceLedgerRow:
    """A stored check-in row as read from officer_attendance or staff_attendance.

    ledger_ref is officer_id for the officer ledger and user_id for staff.
    """

    record_id: str
    ledger_ref: str
    employee_class: EmployeeClass
    work_date: date
    status: str
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    check_in_address: Optional[str] = None
    check_out_address: Optional[str] = None
    total_hours_worked: float = 0.0
    overtime_hours: float = 0.0
    notes: Optional[str] = None


@dataclass(frozen=True)
class DailyAttendanceRecord:
    record_id: str
    employee_id: str
    employee_name: str
    employee_class: EmployeeClass
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    check_in_address: Optional[str]
    check_out_address: Optional[str]
    total_hours_worked: float
    overtime_hours: float
    status: str
    is_late: bool
    missed_checkout: bool
    is_uninformed_absence: bool = False
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "employee_class": self.employee_class.value,
            "date": self.work_date.isoformat(),
            "check_in_time": self.check_in_time.isoformat() if self.check_in_time else None,
            "check_out_time": self.check_out_time.isoformat() if self.check_out_time else None,
            "check_in_address": self.check_in_address,
            "check_out_address": self.check_out_address,
            "total_hours_worked": self.total_hours_worked,
            "overtime_hours": self.overtime_hours,
            "status": self.status,
            "is_late": self.is_late,
            "missed_checkout": self.missed_checkout,
            "is_uninformed_absence": self.is_uninformed_absence,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class AttendanceMonthTotals:
    days_present: int = 0
    attendance_dates: frozenset[date] = field(default_factory=frozenset)
    total_hours: float = 0.0
    total_overtime_hours: float = 0.0
