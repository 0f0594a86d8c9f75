from __future__ import annotations

from flask import Flask, request

from ..common.http import date_field, domain_error_response, enum_value, json_body, ok, ok_fetch
from ..container import Container
from ..core.enums import RequestStatus
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    service = container.overtime_service

    @app.route("/api/overtime", methods=["GET"], endpoint="overtime_list")
    def overtime_list():
        try:
            raw = request.args.get("status")
            status = enum_value(RequestStatus, raw, "status") if raw else None
            result = service.list_requests(status)
        except DomainError as e:
            return domain_error_response(e)
        return ok_fetch(result, lambda rows: [r.to_dict() for r in rows])

    @app.route("/api/overtime", methods=["POST"], endpoint="overtime_create")
    def overtime_create():
        try:
            data = json_body()
            request_id = service.create_request(
                data.get("employee_id") or "",
                date_field(data, "date"),
                data.get("requested_hours"),
                data.get("reason") or "",
            )
        except DomainError as e:
            return domain_error_response(e)
        return ok({"id": request_id}, 201)

    @app.route("/api/overtime/<request_id>/approve", methods=["POST"], endpoint="overtime_approve")
    def overtime_approve(request_id: str):
        try:
            data = json_body()
            service.approve(request_id, data.get("approver_id") or "", data.get("approver_name") or "")
        except DomainError as e:
            return domain_error_response(e)
        return ok({"id": request_id, "status": RequestStatus.APPROVED.value})

    @app.route("/api/overtime/<request_id>/reject", methods=["POST"], endpoint="overtime_reject")
    def overtime_reject(request_id: str):
        try:
            data = json_body()
            service.reject(
                request_id,
                data.get("approver_id") or "",
                data.get("approver_name") or "",
                data.get("reason") or "",
            )
        except DomainError as e:
            return domain_error_response(e)
        return ok({"id": request_id, "status": RequestStatus.REJECTED.value})
