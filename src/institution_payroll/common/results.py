from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Read result that tells "no data" apart from "fetch failed".

    A degraded result carries a safe default in ``data`` plus the failure
    message, so callers can decide whether to retry, warn or proceed.
    """

    data: T
    degraded: bool = False
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: T) -> "FetchResult[T]":
        return cls(data=data)

    @classmethod
    def failed(cls, default: T, error: str) -> "FetchResult[T]":
        return cls(data=default, degraded=True, error=error)


@dataclass(frozen=True)
class EmployeeFailure:
    """One employee that a batch run could not process."""

    employee_id: str
    reason: str

    def to_dict(self) -> dict:
        return {"employee_id": self.employee_id, "reason": self.reason}
