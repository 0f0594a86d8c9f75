from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..attendance.model import DailyAttendanceRecord


@dataclass(frozen=True)
class AttendanceCounts:
    present: int = 0
    absent: int = 0
    late: int = 0
    leave: int = 0
    no_pay: int = 0


@dataclass(frozen=True)
class CalendarDayData:
    day: date
    day_of_month: int
    is_weekend: bool
    is_holiday: bool
    is_today: bool
    is_future: bool
    attendance: AttendanceCounts
    holiday_name: Optional[str] = None
    records: list[DailyAttendanceRecord] = field(default_factory=list)

    def to_dict(self, *, include_records: bool = True) -> dict:
        out = {
            "date": self.day.isoformat(),
            "day_of_month": self.day_of_month,
            "is_weekend": self.is_weekend,
            "is_holiday": self.is_holiday,
            "holiday_name": self.holiday_name,
            "is_today": self.is_today,
            "is_future": self.is_future,
            "attendance": {
                "present": self.attendance.present,
                "absent": self.attendance.absent,
                "late": self.attendance.late,
                "leave": self.attendance.leave,
                "no_pay": self.attendance.no_pay,
            },
        }
        if include_records:
            out["records"] = [r.to_dict() for r in self.records]
        return out
