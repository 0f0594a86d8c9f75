from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class LeaveApplication:
    application_id: str
    applicant_id: str
    start_date: date
    end_date: date
    status: RequestStatus
    is_lop: bool = False
    reason: Optional[str] = None


@dataclass(frozen=True)
class LeaveCoverage:
    leave_day_count: int = 0
    leave_dates: frozenset[date] = field(default_factory=frozenset)
