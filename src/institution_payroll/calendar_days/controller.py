from __future__ import annotations

from flask import Flask, request

from ..common.http import date_arg, date_field, domain_error_response, enum_value, fail, json_body, ok
from ..container import Container
from ..core.enums import CalendarScope, DayType
from ..core.exceptions import DomainError
from .model import DayTypeAssignment


def register(app: Flask, container: Container) -> None:
    service = container.calendar_day_service

    @app.route("/api/calendar/day-types", methods=["GET"], endpoint="day_types_list")
    def day_types_list():
        try:
            scope = enum_value(CalendarScope, request.args.get("scope"), "scope", default=CalendarScope.COMPANY)
            institution_id = request.args.get("institution_id")
            start = date_arg("start", required=False)
            end = date_arg("end", required=False)
            if start and end:
                types = service.get_day_types(scope, start, end, institution_id)
            else:
                year = int(request.args.get("year") or 0)
                month = int(request.args.get("month") or 0)
                types = service.get_day_types_for_month(scope, year, month, institution_id)
        except ValueError:
            return fail("month and year must be integers")
        except DomainError as e:
            return domain_error_response(e)
        return ok([{"date": d.isoformat(), "day_type": t.value} for d, t in sorted(types.items())])

    @app.route("/api/calendar/day-types", methods=["PUT"], endpoint="day_types_set")
    def day_types_set():
        try:
            data = json_body()
            day = date_field(data, "date")
            service.set_day_type(
                enum_value(CalendarScope, data.get("scope"), "scope"),
                day,
                enum_value(DayType, data.get("day_type"), "day_type"),
                institution_id=data.get("institution_id"),
                description=data.get("description"),
            )
        except DomainError as e:
            return domain_error_response(e)
        return ok({"date": day.isoformat()})

    @app.route("/api/calendar/day-types", methods=["DELETE"], endpoint="day_types_delete")
    def day_types_delete():
        try:
            deleted = service.delete_day_type(
                enum_value(CalendarScope, request.args.get("scope"), "scope"),
                date_arg("date"),
                institution_id=request.args.get("institution_id"),
            )
        except DomainError as e:
            return domain_error_response(e)
        if not deleted:
            return fail("No day type set for that date", 404)
        return ok()

    @app.route("/api/calendar/day-types/bulk", methods=["PUT"], endpoint="day_types_bulk")
    def day_types_bulk():
        try:
            data = json_body()
            raw_entries = data.get("entries")
            if not isinstance(raw_entries, list):
                return fail("entries must be a list")
            if not all(isinstance(e, dict) for e in raw_entries):
                return fail("each entry must be an object with date and day_type")
            entries = [
                DayTypeAssignment(
                    day=date_field(e, "date"),
                    day_type=enum_value(DayType, e.get("day_type"), "day_type"),
                    description=e.get("description"),
                )
                for e in raw_entries
            ]
            count = service.bulk_set_day_types(
                enum_value(CalendarScope, data.get("scope"), "scope"),
                entries,
                institution_id=data.get("institution_id"),
            )
        except DomainError as e:
            return domain_error_response(e)
        return ok({"count": count})

    @app.route("/api/calendar/day-types/quick-setup", methods=["POST"], endpoint="day_types_quick_setup")
    def day_types_quick_setup():
        try:
            data = json_body()
            count = service.quick_setup_month(
                enum_value(CalendarScope, data.get("scope"), "scope"),
                data.get("year"),
                data.get("month"),
                institution_id=data.get("institution_id"),
            )
        except DomainError as e:
            return domain_error_response(e)
        return ok({"count": count}, 201)
