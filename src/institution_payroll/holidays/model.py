from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Holiday:
    holiday_id: str
    name: str
    day: date
    year: int
    institution_id: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_company(self) -> bool:
        return self.institution_id is None
