from __future__ import annotations

from flask import Flask

from ..common.http import date_arg, date_field, domain_error_response, enum_value, json_body, ok, ok_fetch
from ..container import Container
from ..core.enums import EmployeeClass
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/daily", methods=["GET"], endpoint="attendance_daily")
    def attendance_daily():
        try:
            result = service.fetch_daily_attendance(date_arg("start"), date_arg("end"))
        except DomainError as e:
            return domain_error_response(e)
        return ok_fetch(result, lambda rows: [r.to_dict() for r in rows])

    @app.route("/api/attendance/records", methods=["POST"], endpoint="attendance_create")
    def attendance_create():
        try:
            data = json_body()
            created = service.create_attendance_record(
                data.get("employee_id") or "",
                enum_value(EmployeeClass, data.get("employee_class"), "employee_class"),
                date_field(data, "date"),
                data.get("status") or "",
                check_in=data.get("check_in"),
                check_out=data.get("check_out"),
                notes=data.get("notes"),
                institution_id=data.get("institution_id"),
            )
        except DomainError as e:
            return domain_error_response(e)
        return ok({"created": created}, 201 if created else 200)
