from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from ..core.enums import EmployeeClass, RequestStatus


@dataclass(frozen=True)
class OvertimeRequest:
    request_id: str
    employee_id: str
    employee_class: EmployeeClass
    work_date: date
    requested_hours: float
    reason: str
    status: RequestStatus
    calculated_pay: float
    created_at: datetime
    approved_by: Optional[str] = None
    approved_by_name: Optional[str] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    employee_name: Optional[str] = None

    def with_name(self, name: str) -> "OvertimeRequest":
        return replace(self, employee_name=name)

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "employee_class": self.employee_class.value,
            "date": self.work_date.isoformat(),
            "requested_hours": self.requested_hours,
            "reason": self.reason,
            "status": self.status.value,
            "approved_by": self.approved_by,
            "approved_by_name": self.approved_by_name,
            "approved_at": self.approved_at.isoformat() if self.approved_at else None,
            "rejection_reason": self.rejection_reason,
            "calculated_pay": self.calculated_pay,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
