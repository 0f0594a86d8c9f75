from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def list_active_officers(self) -> Sequence[Employee]:
        raise NotImplementedError

    def list_positioned_staff(self) -> Sequence[Employee]:
        """Profiles holding a position; CEO rows are included with is_ceo set."""

        raise NotImplementedError

    def find_officer_by_user_id(self, user_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def find_staff(self, user_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_officers_by_ids(self, officer_ids: Sequence[str]) -> Sequence[Employee]:
        raise NotImplementedError

    def get_profile_names(self, user_ids: Sequence[str]) -> dict[str, str]:
        raise NotImplementedError
