from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import CalendarScope, DayType


@dataclass(frozen=True)
class CalendarDayTypeEntry:
    entry_id: str
    scope: CalendarScope
    institution_id: Optional[str]
    day: date
    day_type: DayType
    description: Optional[str] = None


@dataclass(frozen=True)
class DayTypeAssignment:
    """One row of a bulk replace request."""

    day: date
    day_type: DayType
    description: Optional[str] = None


@dataclass(frozen=True)
class NonWorkingDays:
    weekends: list[date] = field(default_factory=list)
    holidays: list[date] = field(default_factory=list)
