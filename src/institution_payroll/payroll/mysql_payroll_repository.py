from __future__ import annotations

import uuid
from typing import Optional, Sequence

from ..core.enums import DeductionBasis, EmployeeClass, PayrollStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import PayrollRecord, PayrollRecordDraft
from .repository import PayrollRepository

_LOCKED = (PayrollStatus.APPROVED.value, PayrollStatus.PAID.value)

_RECORD_COLUMNS = """
    id, user_id, user_type, month, year, working_days, days_present, days_leave, days_lop,
    lop_overridden, uninformed_leave_days, overtime_hours, monthly_salary, per_day_salary,
    lop_deduction, gross_salary, total_deductions, net_pay, deduction_basis, status,
    created_at, updated_at
"""


def _row_to_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        record_id=str(r["id"]),
        employee_id=str(r["user_id"]),
        employee_class=EmployeeClass(r["user_type"]),
        month=int(r["month"]),
        year=int(r["year"]),
        working_days=int(r.get("working_days") or 0),
        days_present=int(r.get("days_present") or 0),
        days_leave=int(r.get("days_leave") or 0),
        days_lop=float(r.get("days_lop") or 0),
        lop_overridden=bool(r.get("lop_overridden")),
        uninformed_leave_days=int(r.get("uninformed_leave_days") or 0),
        overtime_hours=float(r.get("overtime_hours") or 0),
        monthly_salary=float(r.get("monthly_salary") or 0),
        per_day_salary=float(r.get("per_day_salary") or 0),
        lop_deduction=float(r.get("lop_deduction") or 0),
        gross_salary=float(r.get("gross_salary") or 0),
        total_deductions=float(r.get("total_deductions") or 0),
        net_pay=float(r.get("net_pay") or 0),
        deduction_basis=DeductionBasis(r.get("deduction_basis") or DeductionBasis.NOT_MARKED.value),
        status=PayrollStatus(r["status"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def lop_overrides(self, *, month: int, year: int) -> dict[str, float]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, days_lop FROM payroll_records WHERE month=%s AND year=%s AND lop_overridden=1",
                (int(month), int(year)),
            )
            return {str(r["user_id"]): float(r["days_lop"] or 0) for r in fetchall(cur)}

    def get_lop_override(self, *, employee_id: str, month: int, year: int) -> Optional[float]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT days_lop FROM payroll_records
                WHERE user_id=%s AND month=%s AND year=%s AND lop_overridden=1
                """,
                (employee_id, int(month), int(year)),
            )
            r = fetchone(cur)
            return float(r["days_lop"] or 0) if r else None

    @staticmethod
    def _lock_existing(cur, employee_id: str, month: int, year: int) -> Optional[dict]:
        cur.execute(
            "SELECT id, status FROM payroll_records WHERE user_id=%s AND month=%s AND year=%s FOR UPDATE",
            (employee_id, int(month), int(year)),
        )
        existing = fetchone(cur)
        if existing and existing["status"] in _LOCKED:
            raise ConflictError(
                f"Payroll for {employee_id} {int(month):02d}/{int(year)} is already {existing['status']}"
            )
        return existing

    def upsert_generated(self, draft: PayrollRecordDraft) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            existing = self._lock_existing(cur, draft.employee_id, draft.month, draft.year)
            record_id = str(existing["id"]) if existing else str(uuid.uuid4())
            cur.execute(
                """
                INSERT INTO payroll_records(
                    id, user_id, user_type, month, year, working_days, days_present, days_leave,
                    days_lop, lop_overridden, uninformed_leave_days, overtime_hours, monthly_salary,
                    per_day_salary, lop_deduction, gross_salary, total_deductions, net_pay, deduction_basis, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    user_type=VALUES(user_type),
                    working_days=VALUES(working_days),
                    days_present=VALUES(days_present),
                    days_leave=VALUES(days_leave),
                    days_lop=VALUES(days_lop),
                    lop_overridden=VALUES(lop_overridden),
                    uninformed_leave_days=VALUES(uninformed_leave_days),
                    overtime_hours=VALUES(overtime_hours),
                    monthly_salary=VALUES(monthly_salary),
                    per_day_salary=VALUES(per_day_salary),
                    lop_deduction=VALUES(lop_deduction),
                    gross_salary=VALUES(gross_salary),
                    total_deductions=VALUES(total_deductions),
                    net_pay=VALUES(net_pay),
                    deduction_basis=VALUES(deduction_basis)
                """,
                (
                    record_id,
                    draft.employee_id,
                    draft.employee_class.value,
                    int(draft.month),
                    int(draft.year),
                    draft.working_days,
                    draft.days_present,
                    draft.days_leave,
                    round(draft.days_lop, 2),
                    1 if draft.lop_overridden else 0,
                    draft.uninformed_leave_days,
                    round(draft.overtime_hours, 2),
                    round(draft.monthly_salary, 2),
                    round(draft.per_day_salary, 2),
                    round(draft.lop_deduction, 2),
                    round(draft.gross_salary, 2),
                    round(draft.total_deductions, 2),
                    round(draft.net_pay, 2),
                    draft.deduction_basis.value,
                    PayrollStatus.DRAFT.value,
                ),
            )
            return record_id

    def get_record(self, *, record_id: str) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_RECORD_COLUMNS} FROM payroll_records WHERE id=%s", (record_id,))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_records(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        status: Optional[PayrollStatus] = None,
        limit: int = 500,
    ) -> Sequence[PayrollRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        if month is not None:
            clauses.append("month=%s")
            params.append(int(month))
        if year is not None:
            clauses.append("year=%s")
            params.append(int(year))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM payroll_records
                WHERE {where}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def update_status(self, *, record_id: str, from_status: PayrollStatus, to_status: PayrollStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE payroll_records SET status=%s WHERE id=%s AND status=%s",
                (to_status.value, record_id, from_status.value),
            )
            return cur.rowcount > 0
