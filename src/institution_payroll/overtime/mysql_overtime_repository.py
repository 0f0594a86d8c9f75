from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import EmployeeClass, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import OvertimeRequest
from .repository import OvertimeRepository

_COLUMNS = """
    id, user_id, user_type, date, requested_hours, reason, status, approved_by,
    approved_by_name, approved_at, rejection_reason, calculated_pay, created_at
"""


def _row_to_request(r: dict) -> OvertimeRequest:
    return OvertimeRequest(
        request_id=str(r["id"]),
        employee_id=str(r["user_id"]),
        employee_class=EmployeeClass(r.get("user_type") or EmployeeClass.STAFF.value),
        work_date=r["date"],
        requested_hours=float(r["requested_hours"] or 0),
        reason=r.get("reason") or "",
        status=RequestStatus(r["status"]),
        calculated_pay=float(r.get("calculated_pay") or 0),
        created_at=r["created_at"],
        approved_by=r.get("approved_by"),
        approved_by_name=r.get("approved_by_name"),
        approved_at=r.get("approved_at"),
        rejection_reason=r.get("rejection_reason"),
    )


class MySQLOvertimeRepository(OvertimeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        request_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO overtime_requests(id, user_id, user_type, date, requested_hours, reason, status, calculated_pay)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request_id,
                    employee_id,
                    employee_class.value,
                    work_date,
                    requested_hours,
                    reason,
                    RequestStatus.PENDING.value,
                    calculated_pay,
                ),
            )
        return request_id

    def get(self, *, request_id: str) -> Optional[OvertimeRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM overtime_requests WHERE id=%s", (request_id,))
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def list_by_status(self, *, status: Optional[RequestStatus] = None, limit: int = 500) -> Sequence[OvertimeRequest]:
        clauses = ["1=1"]
        params: list[object] = []
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM overtime_requests
                WHERE {" AND ".join(clauses)}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_row_to_request(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE overtime_requests
                SET status=%s, approved_by=%s, approved_by_name=%s, approved_at=%s, rejection_reason=%s
                WHERE id=%s AND status=%s
                """,
                (
                    status.value,
                    approver_id,
                    approver_name,
                    decided_at,
                    rejection_reason,
                    request_id,
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def pending_totals(self) -> tuple[int, float]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS cnt, COALESCE(SUM(requested_hours), 0) AS hours
                FROM overtime_requests
                WHERE status=%s
                """,
                (RequestStatus.PENDING.value,),
            )
            r = fetchone(cur) or {}
            return int(r.get("cnt") or 0), float(r.get("hours") or 0)
