from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import CalendarScope, DayType
from .model import CalendarDayTypeEntry, DayTypeAssignment


class CalendarDayTypeRepository(Protocol):
    def list_entries(
        self,
        *,
        scope: CalendarScope,
        institution_id: Optional[str],
        start: date,
        end: date,
    ) -> Sequence[CalendarDayTypeEntry]:
        """Entries of one scope (institution_id None = company rows), start/end inclusive."""

        raise NotImplementedError

    def upsert(
        self,
        *,
        scope: CalendarScope,
        institution_id: Optional[str],
        day: date,
        day_type: DayType,
        description: Optional[str] = None,
    ) -> None:
        raise NotImplementedError

    def replace_many(
        self,
        *,
        scope: CalendarScope,
        institution_id: Optional[str],
        entries: Sequence[DayTypeAssignment],
    ) -> int:
        """Delete the listed dates and write the new entries in one transaction."""

        raise NotImplementedError

    def delete(self, *, scope: CalendarScope, institution_id: Optional[str], day: date) -> bool:
        raise NotImplementedError
