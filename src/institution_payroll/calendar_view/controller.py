from __future__ import annotations

from flask import Flask, request

from ..common.http import domain_error_response, enum_value, month_year_args, ok_fetch
from ..container import Container
from ..core.enums import EmployeeTypeFilter
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    service = container.calendar_service

    @app.route("/api/attendance/calendar", methods=["GET"], endpoint="attendance_calendar")
    def attendance_calendar():
        try:
            month, year = month_year_args()
            employee_filter = enum_value(
                EmployeeTypeFilter,
                request.args.get("employee_type"),
                "employee_type",
                default=EmployeeTypeFilter.ALL,
            )
            include_records = request.args.get("records", "1") != "0"
            result = service.build_calendar(month, year, employee_filter)
        except DomainError as e:
            return domain_error_response(e)
        return ok_fetch(result, lambda days: [d.to_dict(include_records=include_records) for d in days])
