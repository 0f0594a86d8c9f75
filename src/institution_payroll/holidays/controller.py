from __future__ import annotations

from flask import Flask, request

from ..common.http import date_field, domain_error_response, fail, json_body, month_year_args, ok
from ..container import Container
from ..core.exceptions import DomainError
from .model import Holiday


def _holiday_dict(h: Holiday) -> dict:
    return {
        "id": h.holiday_id,
        "name": h.name,
        "date": h.day.isoformat(),
        "year": h.year,
        "institution_id": h.institution_id,
        "description": h.description,
    }


def register(app: Flask, container: Container) -> None:
    service = container.holiday_service

    @app.route("/api/holidays", methods=["GET"], endpoint="holidays_list")
    def holidays_list():
        """?month&year[&institution_id] gives the merged month map; ?year alone lists rows."""
        try:
            institution_id = request.args.get("institution_id")
            if request.args.get("month"):
                month, year = month_year_args()
                merged = service.get_holidays(month, year, institution_id)
                return ok([{"date": d.isoformat(), "name": n} for d, n in sorted(merged.items())])

            _, year = month_year_args()
            if institution_id:
                rows = service.list_institution_holidays(institution_id, year)
            else:
                rows = service.list_company_holidays(year)
        except DomainError as e:
            return domain_error_response(e)
        return ok([_holiday_dict(h) for h in rows])

    @app.route("/api/holidays/company", methods=["POST"], endpoint="holidays_add_company")
    def holidays_add_company():
        try:
            data = json_body()
            holiday_id = service.add_company_holiday(
                name=data.get("name") or "",
                day=date_field(data, "date"),
                description=data.get("description"),
            )
        except DomainError as e:
            return domain_error_response(e)
        return ok({"id": holiday_id}, 201)

    @app.route("/api/holidays/institution", methods=["POST"], endpoint="holidays_add_institution")
    def holidays_add_institution():
        try:
            data = json_body()
            holiday_id = service.add_institution_holiday(
                institution_id=data.get("institution_id") or "",
                name=data.get("name") or "",
                day=date_field(data, "date"),
                description=data.get("description"),
            )
        except DomainError as e:
            return domain_error_response(e)
        return ok({"id": holiday_id}, 201)

    @app.route("/api/holidays/<kind>/<holiday_id>", methods=["DELETE"], endpoint="holidays_delete")
    def holidays_delete(kind: str, holiday_id: str):
        try:
            if kind == "company":
                service.delete_company_holiday(holiday_id)
            elif kind == "institution":
                service.delete_institution_holiday(holiday_id)
            else:
                return fail("kind must be company or institution", 404)
        except DomainError as e:
            return domain_error_response(e)
        return ok()
