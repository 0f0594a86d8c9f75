from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import LeaveApplication


class LeaveRepository(Protocol):
    def list_approved_overlapping(self, *, applicant_id: str, start: date, end: date) -> Sequence[LeaveApplication]:
        """Approved applications with start_date <= end and end_date >= start."""

        raise NotImplementedError
