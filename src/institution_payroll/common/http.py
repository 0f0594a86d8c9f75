from __future__ import annotations

from datetime import date
from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import ConflictError, DataSourceError, DomainError, NotFoundError, ValidationError
from .datetime_utils import parse_iso_date, today_local
from .results import FetchResult

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
    (DataSourceError, 503),
)


def ok(data: Any = None, status: int = 200, **meta):
    payload = {"success": True, "data": data}
    if meta:
        payload["meta"] = meta
    return jsonify(payload), status


def ok_fetch(result: FetchResult, transform=None):
    data = transform(result.data) if transform else result.data
    meta = {"degraded": result.degraded}
    if result.error:
        meta["error"] = result.error
    return ok(data, **meta)


def fail(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def domain_error_response(exc: DomainError):
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return fail(str(exc), status)
    return fail(str(exc), 400)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("JSON object body is required")
    return data


def month_year_args(*, default_today: bool = True) -> tuple[int, int]:
    """Read ?month=&year= (defaults to the current month)."""
    today = today_local()
    try:
        month = int(request.args.get("month") or (today.month if default_today else 0))
        year = int(request.args.get("year") or (today.year if default_today else 0))
    except ValueError:
        raise ValidationError("month and year must be integers")
    return month, year


def date_arg(name: str, *, required: bool = True) -> Optional[date]:
    raw = request.args.get(name)
    if not raw:
        if required:
            raise ValidationError(f"{name} is required (YYYY-MM-DD)")
        return None
    try:
        return parse_iso_date(raw)
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD")


def date_field(data: dict, name: str) -> date:
    raw = data.get(name)
    if not raw:
        raise ValidationError(f"{name} is required (YYYY-MM-DD)")
    try:
        return parse_iso_date(str(raw))
    except ValueError:
        raise ValidationError(f"{name} must be YYYY-MM-DD")


def enum_value(enum_cls, raw, name: str, *, default=None):
    if raw in (None, ""):
        if default is None:
            raise ValidationError(f"{name} is required")
        return default
    try:
        return enum_cls(str(raw).strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{name} must be one of: {allowed}")
