from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.results import FetchResult
from ..common.validators import require_non_empty, require_positive_hours
from ..core.constants import DEFAULT_OVERTIME_MULTIPLIER, DEFAULT_STAFF_HOURLY_RATE, MAX_OVERTIME_HOURS_PER_DAY
from ..core.enums import RequestStatus
from ..core.exceptions import ConflictError, DataSourceError, NotFoundError
from ..employees.service import UNKNOWN_NAME, EmployeeService
from ..payroll.salary import hourly_rate_for
from .model import OvertimeRequest
from .repository import OvertimeRepository

log = logging.getLogger(__name__)


class OvertimeService:
    """pending -> approved | rejected. Decisions never touch payroll."""

    def __init__(
        self,
        overtime: OvertimeRepository,
        employees: EmployeeService,
        *,
        overtime_multiplier: float = DEFAULT_OVERTIME_MULTIPLIER,
        default_hourly_rate: float = DEFAULT_STAFF_HOURLY_RATE,
    ):
        self._overtime = overtime
        self._employees = employees
        self._multiplier = float(overtime_multiplier)
        self._default_hourly_rate = float(default_hourly_rate)

    def create_request(self, employee_id: str, work_date: date, requested_hours, reason: str) -> str:
        employee_id = require_non_empty(employee_id, "employee_id")
        hours = require_positive_hours(requested_hours, "requested_hours", maximum=MAX_OVERTIME_HOURS_PER_DAY)
        reason = require_non_empty(reason, "reason")

        employee = self._employees.get_employee(employee_id)
        rate = hourly_rate_for(employee, default_hourly_rate=self._default_hourly_rate)
        multiplier = employee.overtime_rate_multiplier or self._multiplier

        return self._overtime.create(
            employee_id=employee.employee_id,
            employee_class=employee.employee_class,
            work_date=work_date,
            requested_hours=hours,
            reason=reason,
            calculated_pay=round(hours * rate * multiplier, 2),
        )

    def list_requests(self, status: Optional[RequestStatus] = None) -> FetchResult[list[OvertimeRequest]]:
        status = RequestStatus(status) if status else None
        try:
            requests = list(self._overtime.list_by_status(status=status))
        except DataSourceError as e:
            log.warning("overtime requests unavailable: %s", e)
            return FetchResult.failed([], str(e))

        if not requests:
            return FetchResult.ok([])

        try:
            names = self._employees.names_by_user_id(r.employee_id for r in requests)
        except DataSourceError as e:
            log.warning("overtime requester names unavailable: %s", e)
            return FetchResult(data=[r.with_name(UNKNOWN_NAME) for r in requests], degraded=True, error=str(e))

        return FetchResult.ok([r.with_name(names.get(r.employee_id, UNKNOWN_NAME)) for r in requests])

    def approve(self, request_id: str, approver_id: str, approver_name: str) -> None:
        approver_id = require_non_empty(approver_id, "approver_id")
        approver_name = require_non_empty(approver_name, "approver_name")
        self._decide(request_id, RequestStatus.APPROVED, approver_id, approver_name)

    def reject(self, request_id: str, approver_id: str, approver_name: str, reason: str) -> None:
        reason = require_non_empty(reason, "reason")
        approver_id = require_non_empty(approver_id, "approver_id")
        approver_name = require_non_empty(approver_name, "approver_name")
        self._decide(request_id, RequestStatus.REJECTED, approver_id, approver_name, rejection_reason=reason)

    def _decide(
        self,
        request_id: str,
        status: RequestStatus,
        approver_id: str,
        approver_name: str,
        *,
        rejection_reason: Optional[str] = None,
    ) -> None:
        changed = self._overtime.decide(
            request_id=request_id,
            status=status,
            approver_id=approver_id,
            approver_name=approver_name,
            decided_at=now_local(),
            rejection_reason=rejection_reason,
        )
        if changed:
            log.info("overtime request %s %s by %s", request_id, status.value, approver_id)
            return

        current = self._overtime.get(request_id=request_id)
        if current is None:
            raise NotFoundError("Overtime request not found")
        raise ConflictError(f"Overtime request is already {current.status.value}")

    def pending_totals(self) -> tuple[int, float]:
        return self._overtime.pending_totals()
