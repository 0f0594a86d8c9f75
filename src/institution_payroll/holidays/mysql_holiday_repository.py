from __future__ import annotations

import uuid
from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Holiday
from .repository import HolidayRepository


def _row_to_holiday(r: dict) -> Holiday:
    return Holiday(
        holiday_id=str(r["id"]),
        name=r["name"],
        day=r["date"],
        year=int(r["year"]),
        institution_id=r.get("institution_id"),
        description=r.get("description"),
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_company(self, *, year: int) -> Sequence[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, name, date, year, NULL AS institution_id, description
                FROM company_holidays
                WHERE year=%s
                ORDER BY date
                """,
                (int(year),),
            )
            return [_row_to_holiday(r) for r in fetchall(cur)]

    def list_institution(self, *, year: int, institution_id: Optional[str] = None) -> Sequence[Holiday]:
        clauses = ["year=%s"]
        params: list[object] = [int(year)]
        if institution_id is not None:
            clauses.append("institution_id=%s")
            params.append(institution_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT id, name, date, year, institution_id, description
                FROM institution_holidays
                WHERE {" AND ".join(clauses)}
                ORDER BY date
                """,
                tuple(params),
            )
            return [_row_to_holiday(r) for r in fetchall(cur)]

    def add_company(self, *, name: str, day: date, description: Optional[str] = None) -> str:
        holiday_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO company_holidays(id, name, date, year, description) VALUES(%s,%s,%s,%s,%s)",
                (holiday_id, name, day, day.year, description),
            )
        return holiday_id

    def add_institution(
        self,
        *,
        institution_id: str,
        name: str,
        day: date,
        description: Optional[str] = None,
    ) -> str:
        holiday_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO institution_holidays(id, institution_id, name, date, year, description)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (holiday_id, institution_id, name, day, day.year, description),
            )
        return holiday_id

    def delete_company(self, *, holiday_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM company_holidays WHERE id=%s", (holiday_id,))
            return cur.rowcount > 0

    def delete_institution(self, *, holiday_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM institution_holidays WHERE id=%s", (holiday_id,))
            return cur.rowcount > 0
