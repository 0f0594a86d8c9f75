from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeClass, RequestStatus
from .model import OvertimeRequest


class OvertimeRepository(Protocol):
    def create(
        self,
        *,
        employee_id: str,
        employee_class: EmployeeClass,
        work_date: date,
        requested_hours: float,
        reason: str,
        calculated_pay: float,
    ) -> str:
        raise NotImplementedError

    def get(self, *, request_id: str) -> Optional[OvertimeRequest]:
        raise NotImplementedError

    def list_by_status(self, *, status: Optional[RequestStatus] = None, limit: int = 500) -> Sequence[OvertimeRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: str,
        status: RequestStatus,
        approver_id: str,
        approver_name: str,
        decided_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """Single conditional update on a pending row; False when nothing changed."""

        raise NotImplementedError

    def pending_totals(self) -> tuple[int, float]:
        raise NotImplementedError
