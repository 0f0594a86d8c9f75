from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_month_year(month: int, year: int) -> tuple[int, int]:
    try:
        month = int(month)
        year = int(year)
    except (TypeError, ValueError):
        raise ValidationError("month and year must be integers")
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    if not 1900 <= year <= 9999:
        raise ValidationError("year is out of range")
    return month, year


def require_positive_hours(value, field_name: str, *, maximum: float) -> float:
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if hours <= 0 or hours > maximum:
        raise ValidationError(f"{field_name} must be greater than 0 and at most {maximum:g}")
    return hours
