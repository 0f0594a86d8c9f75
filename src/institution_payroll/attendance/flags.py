"""Read-time flags derived from a ledger row. Never stored."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.constants import LATE_AFTER_HOUR, LATE_AFTER_MINUTE
from ..core.enums import AttendanceStatus


def is_late(check_in_time: Optional[datetime]) -> bool:
    if check_in_time is None:
        return False
    hour, minute = check_in_time.hour, check_in_time.minute
    return hour > LATE_AFTER_HOUR or (hour == LATE_AFTER_HOUR and minute > LATE_AFTER_MINUTE)


def missed_checkout(
    check_in_time: Optional[datetime],
    check_out_time: Optional[datetime],
    status: str,
) -> bool:
    # A row still "checked_in" is an open day, not a missed checkout.
    return (
        check_in_time is not None
        and check_out_time is None
        and status != AttendanceStatus.CHECKED_IN.value
    )
