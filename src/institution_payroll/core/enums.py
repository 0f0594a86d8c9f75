from __future__ import annotations

from enum import Enum


class EmployeeClass(str, Enum):
    """Which attendance ledger an employee belongs to."""

    OFFICER = "officer"
    STAFF = "staff"


class EmployeeTypeFilter(str, Enum):
    ALL = "all"
    OFFICER = "officer"
    STAFF = "staff"

    def matches(self, employee_class: EmployeeClass) -> bool:
        return self is EmployeeTypeFilter.ALL or self.value == employee_class.value


class CalendarScope(str, Enum):
    """Scope of a day-type classification."""

    COMPANY = "company"
    INSTITUTION = "institution"


class DayType(str, Enum):
    WORKING = "working"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"


class AttendanceStatus(str, Enum):
    """Known ledger statuses. Ledger rows may carry other values too."""

    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    PRESENT = "present"
    LEAVE = "leave"
    HOLIDAY = "holiday"
    NO_PAY = "no_pay"


class RequestStatus(str, Enum):
    """Approval workflow state (overtime requests, leave applications)."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PayrollStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"


class DeductionBasis(str, Enum):
    """What drove the LOP deduction of a payroll summary."""

    NOT_MARKED = "not_marked"
    HR_OVERRIDE = "hr_override"
