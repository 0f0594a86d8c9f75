from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import LeaveApplication
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_approved_overlapping(self, *, applicant_id: str, start: date, end: date) -> Sequence[LeaveApplication]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, applicant_id, start_date, end_date, is_lop, status, reason
                FROM leave_applications
                WHERE applicant_id=%s AND status=%s AND start_date <= %s AND end_date >= %s
                ORDER BY start_date
                """,
                (applicant_id, RequestStatus.APPROVED.value, end, start),
            )
            return [
                LeaveApplication(
                    application_id=str(r["id"]),
                    applicant_id=str(r["applicant_id"]),
                    start_date=r["start_date"],
                    end_date=r["end_date"],
                    status=RequestStatus(r["status"]),
                    is_lop=bool(r.get("is_lop")),
                    reason=r.get("reason"),
                )
                for r in fetchall(cur)
            ]
