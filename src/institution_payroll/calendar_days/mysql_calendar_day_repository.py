from __future__ import annotations

import uuid
from datetime import date
from typing import Optional, Sequence

from ..core.enums import CalendarScope, DayType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import CalendarDayTypeEntry, DayTypeAssignment
from .repository import CalendarDayTypeRepository

_UPSERT_SQL = """
    INSERT INTO calendar_day_types(id, calendar_type, institution_id, date, day_type, description)
    VALUES(%s,%s,%s,%s,%s,%s)
    ON DUPLICATE KEY UPDATE day_type=VALUES(day_type), description=VALUES(description)
"""


class MySQLCalendarDayTypeRepository(CalendarDayTypeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_entries(
        self,
        *,
        scope: CalendarScope,
        institution_id: Optional[str],
        start: date,
        end: date,
    ) -> Sequence[CalendarDayTypeEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, calendar_type, institution_id, date, day_type, description
                FROM calendar_day_types
                WHERE calendar_type=%s AND institution_key=%s AND date BETWEEN %s AND %s
                ORDER BY date
                """,
                (scope.value, institution_id or "", start, end),
            )
            rows = fetchall(cur)
            return [
                CalendarDayTypeEntry(
                    entry_id=str(r["id"]),
                    scope=CalendarScope(r["calendar_type"]),
                    institution_id=r.get("institution_id"),
                    day=r["date"],
                    day_type=DayType(r["day_type"]),
                    description=r.get("description"),
                )
                for r in rows
            ]

    def upsert(
        self,
        *,
        scope: CalendarScope,
        institution_id: Optional[str],
        day: date,
        day_type: DayType,
        description: Optional[str] = None,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _UPSERT_SQL,
                (str(uuid.uuid4()), scope.value, institution_id, day, day_type.value, description),
            )

    def replace_many(
        self,
        *,
        scope: CalendarScope,
        institution_id: Optional[str],
        entries: Sequence[DayTypeAssignment],
    ) -> int:
        if not entries:
            return 0
        days = [e.day for e in entries]
        placeholders = ",".join(["%s"] * len(days))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                DELETE FROM calendar_day_types
                WHERE calendar_type=%s AND institution_key=%s AND date IN ({placeholders})
                """,
                tuple([scope.value, institution_id or ""] + days),
            )
            cur.executemany(
                _UPSERT_SQL,
                [
                    (str(uuid.uuid4()), scope.value, institution_id, e.day, e.day_type.value, e.description)
                    for e in entries
                ],
            )
            return len(entries)

    def delete(self, *, scope: CalendarScope, institution_id: Optional[str], day: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM calendar_day_types WHERE calendar_type=%s AND institution_key=%s AND date=%s",
                (scope.value, institution_id or "", day),
            )
            return cur.rowcount > 0
