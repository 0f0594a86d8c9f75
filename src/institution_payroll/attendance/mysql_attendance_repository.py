from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import EmployeeClass
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_datetime
from .model import AttendanceLedgerRow
from .repository import AttendanceRepository

# (table, ledger key column) per employee class
_LEDGERS = {
    EmployeeClass.OFFICER: ("officer_attendance", "officer_id"),
    EmployeeClass.STAFF: ("staff_attendance", "user_id"),
}


def _row_to_model(r: dict, employee_class: EmployeeClass, key_col: str) -> AttendanceLedgerRow:
    return AttendanceLedgerRow(
        record_id=str(r["id"]),
        ledger_ref=str(r[key_col]),
        employee_class=employee_class,
        work_date=r["date"],
        status=r.get("status") or "unknown",
        check_in_time=normalize_mysql_datetime(r.get("check_in_time")),
        check_out_time=normalize_mysql_datetime(r.get("check_out_time")),
        check_in_address=r.get("check_in_address"),
        check_out_address=r.get("check_out_address"),
        total_hours_worked=float(r.get("total_hours_worked") or 0),
        overtime_hours=float(r.get("overtime_hours") or 0),
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(
        self,
        *,
        employee_class: EmployeeClass,
        ledger_ref: str,
        start: date,
        end: date,
    ) -> Sequence[AttendanceLedgerRow]:
        table, key_col = _LEDGERS[employee_class]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, {key_col}, date, status, check_in_time, check_out_time,
                       check_in_address, check_out_address, total_hours_worked, overtime_hours, notes
                FROM {table}
                WHERE {key_col}=%s AND date BETWEEN %s AND %s
                ORDER BY date
                """,
                (ledger_ref, start, end),
            )
            return [_row_to_model(r, employee_class, key_col) for r in fetchall(cur)]

    def list_range(self, *, employee_class: EmployeeClass, start: date, end: date) -> Sequence[AttendanceLedgerRow]:
        table, key_col = _LEDGERS[employee_class]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, {key_col}, date, status, check_in_time, check_out_time,
                       check_in_address, check_out_address, total_hours_worked, overtime_hours, notes
                FROM {table}
                WHERE date BETWEEN %s AND %s
                ORDER BY date DESC
                """,
                (start, end),
            )
            return [_row_to_model(r, employee_class, key_col) for r in fetchall(cur)]

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
        table, key_col = _LEDGERS[employee_class]
        record_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {table}(
                    id, {key_col}, institution_id, date, status,
                    check_in_time, check_out_time, total_hours_worked, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record_id,
                    ledger_ref,
                    institution_id,
                    work_date,
                    status,
                    check_in_time,
                    check_out_time,
                    total_hours_worked,
                    notes,
                ),
            )
        return record_id
