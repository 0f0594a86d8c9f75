from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def list_company(self, *, year: int) -> Sequence[Holiday]:
        raise NotImplementedError

    def list_institution(self, *, year: int, institution_id: Optional[str] = None) -> Sequence[Holiday]:
        """institution_id None returns the holidays of every institution."""

        raise NotImplementedError

    def add_company(self, *, name: str, day: date, description: Optional[str] = None) -> str:
        raise NotImplementedError

    def add_institution(
        self,
        *,
        institution_id: str,
        name: str,
        day: date,
        description: Optional[str] = None,
    ) -> str:
        raise NotImplementedError

    def delete_company(self, *, holiday_id: str) -> bool:
        raise NotImplementedError

    def delete_institution(self, *, holiday_id: str) -> bool:
        raise NotImplementedError
