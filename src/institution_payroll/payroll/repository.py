from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayrollRecord, PayrollRecordDraft


class PayrollRepository(Protocol):
    def lop_overrides(self, *, month: int, year: int) -> dict[str, float]:
        """employee_id -> HR-set days_lop for records with an override."""

        raise NotImplementedError

    def get_lop_override(self, *, employee_id: str, month: int, year: int) -> Optional[float]:
        raise NotImplementedError

    def upsert_generated(self, draft: PayrollRecordDraft) -> str:
        """Insert or refresh the (employee, month, year) row and return its id.

        lop_overridden is taken from the draft.

        Raises ConflictError when the stored row is already approved or paid.
        """

        raise NotImplementedError

    def get_record(self, *, record_id: str) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def list_records(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        status: Optional[PayrollStatus] = None,
        limit: int = 500,
    ) -> Sequence[PayrollRecord]:
        raise NotImplementedError

    def update_status(self, *, record_id: str, from_status: PayrollStatus, to_status: PayrollStatus) -> bool:
        """Conditional update; False when the row is not in from_status."""

        raise NotImplementedError
