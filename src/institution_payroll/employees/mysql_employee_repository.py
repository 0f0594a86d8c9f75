from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..core.enums import EmployeeClass
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee, SalaryStructure, StatutoryInfo
from .repository import EmployeeRepository

_OFFICER_COLUMNS = """
    id, user_id, full_name, email, department, designation, annual_salary, hourly_rate,
    overtime_rate_multiplier, salary_structure, statutory_info, assigned_institutions, join_date
"""

_STAFF_SELECT = """
    SELECT p.id, p.name, p.email, p.institution_id, p.designation, p.annual_salary, p.hourly_rate,
           p.overtime_rate_multiplier, p.salary_structure, p.statutory_info, p.join_date, p.is_ceo,
           pos.display_name, pos.position_name, pos.is_ceo_position
    FROM profiles p
    LEFT JOIN positions pos ON pos.id = p.position_id
"""


def _json(value: Any) -> Any:
    # JSON columns arrive as str, bytes or already decoded depending on the connector.
    if value is None or value == "":
        return None
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return None
    return value


def _opt_float(value: Any) -> Optional[float]:
    return float(value) if value not in (None, "") else None


def _officer_from_row(r: dict) -> Employee:
    institutions = _json(r.get("assigned_institutions")) or []
    return Employee(
        employee_id=str(r.get("user_id") or r["id"]),
        employee_class=EmployeeClass.OFFICER,
        name=r["full_name"],
        ledger_ref=str(r["id"]),
        email=r.get("email"),
        institution_id=str(institutions[0]) if institutions else None,
        department=r.get("department") or "STEM",
        designation=r.get("designation"),
        join_date=coerce_date(r.get("join_date")),
        annual_salary=_opt_float(r.get("annual_salary")),
        hourly_rate=_opt_float(r.get("hourly_rate")),
        overtime_rate_multiplier=_opt_float(r.get("overtime_rate_multiplier")),
        salary_structure=SalaryStructure.from_mapping(_json(r.get("salary_structure"))),
        statutory_info=StatutoryInfo.from_mapping(_json(r.get("statutory_info"))),
    )


def _staff_from_row(r: dict) -> Employee:
    return Employee(
        employee_id=str(r["id"]),
        employee_class=EmployeeClass.STAFF,
        name=r["name"],
        ledger_ref=str(r["id"]),
        email=r.get("email"),
        institution_id=r.get("institution_id"),
        position_name=r.get("display_name") or r.get("position_name"),
        designation=r.get("designation"),
        join_date=coerce_date(r.get("join_date")),
        annual_salary=_opt_float(r.get("annual_salary")),
        hourly_rate=_opt_float(r.get("hourly_rate")),
        overtime_rate_multiplier=_opt_float(r.get("overtime_rate_multiplier")),
        salary_structure=SalaryStructure.from_mapping(_json(r.get("salary_structure"))),
        statutory_info=StatutoryInfo.from_mapping(_json(r.get("statutory_info"))),
        is_ceo=bool(r.get("is_ceo")) or bool(r.get("is_ceo_position")),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active_officers(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_OFFICER_COLUMNS} FROM officers WHERE status='active' ORDER BY full_name")
            return [_officer_from_row(r) for r in fetchall(cur)]

    def list_positioned_staff(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_STAFF_SELECT} WHERE p.position_id IS NOT NULL ORDER BY p.name")
            return [_staff_from_row(r) for r in fetchall(cur)]

    def find_officer_by_user_id(self, user_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_OFFICER_COLUMNS} FROM officers WHERE user_id=%s", (user_id,))
            r = fetchone(cur)
            return _officer_from_row(r) if r else None

    def find_staff(self, user_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_STAFF_SELECT} WHERE p.id=%s", (user_id,))
            r = fetchone(cur)
            return _staff_from_row(r) if r else None

    def get_officers_by_ids(self, officer_ids: Sequence[str]) -> Sequence[Employee]:
        ids = list(dict.fromkeys(officer_ids))
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_OFFICER_COLUMNS} FROM officers WHERE id IN ({placeholders})", tuple(ids))
            return [_officer_from_row(r) for r in fetchall(cur)]

    def get_profile_names(self, user_ids: Sequence[str]) -> dict[str, str]:
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return {}
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT id, name FROM profiles WHERE id IN ({placeholders})", tuple(ids))
            return {str(r["id"]): r["name"] for r in fetchall(cur)}
