from __future__ import annotations

from flask import Flask, request

from ..common.http import domain_error_response, enum_value, fail, json_body, month_year_args, ok, ok_fetch
from ..container import Container
from ..core.enums import PayrollStatus
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/api/payroll/employees", methods=["GET"], endpoint="payroll_employees")
    def payroll_employees():
        try:
            month, year = month_year_args()
            batch = service.fetch_all_employees(month, year)
        except DomainError as e:
            return domain_error_response(e)
        meta = {"degraded": batch.degraded, "failures": [f.to_dict() for f in batch.failures]}
        if batch.error:
            meta["error"] = batch.error
        return ok([s.to_dict() for s in batch.summaries], **meta)

    @app.route("/api/payroll/generate", methods=["POST"], endpoint="payroll_generate")
    def payroll_generate():
        try:
            data = json_body()
            record_id = service.generate_monthly_payroll(
                data.get("employee_id") or "",
                data.get("month"),
                data.get("year"),
            )
        except DomainError as e:
            return domain_error_response(e)
        return ok({"id": record_id}, 201)

    @app.route("/api/payroll/generate-all", methods=["POST"], endpoint="payroll_generate_all")
    def payroll_generate_all():
        try:
            data = json_body()
            report = service.generate_payroll_for_all(data.get("month"), data.get("year"))
        except DomainError as e:
            return domain_error_response(e)
        return ok(
            {
                "month": report.month,
                "year": report.year,
                "generated": [{"employee_id": g.employee_id, "id": g.record_id} for g in report.generated],
                "failures": [f.to_dict() for f in report.failures],
            }
        )

    @app.route("/api/payroll/records", methods=["GET"], endpoint="payroll_records")
    def payroll_records():
        try:
            month = int(request.args["month"]) if request.args.get("month") else None
            year = int(request.args["year"]) if request.args.get("year") else None
            raw = request.args.get("status")
            status = enum_value(PayrollStatus, raw, "status") if raw else None
            result = service.fetch_payroll_records(month, year, status)
        except ValueError:
            return fail("month and year must be integers")
        except DomainError as e:
            return domain_error_response(e)
        return ok_fetch(result, lambda rows: [r.to_dict() for r in rows])

    @app.route("/api/payroll/records/<record_id>/status", methods=["POST"], endpoint="payroll_record_status")
    def payroll_record_status(record_id: str):
        try:
            data = json_body()
            status = service.update_payroll_status(record_id, enum_value(PayrollStatus, data.get("status"), "status"))
        except DomainError as e:
            return domain_error_response(e)
        return ok({"id": record_id, "status": status.value})

    @app.route("/api/payroll/lop", methods=["PUT"], endpoint="payroll_set_lop")
    def payroll_set_lop():
        try:
            data = json_body()
            record_id = service.set_days_lop(
                data.get("employee_id") or "",
                data.get("month"),
                data.get("year"),
                data.get("days_lop"),
            )
        except DomainError as e:
            return domain_error_response(e)
        return ok({"id": record_id})

    @app.route("/api/payroll/dashboard", methods=["GET"], endpoint="payroll_dashboard")
    def payroll_dashboard():
        try:
            month, year = month_year_args()
            stats = service.dashboard_stats(month, year)
        except DomainError as e:
            return domain_error_response(e)
        return ok(stats.to_dict())

    @app.route("/api/payroll/uninformed-leave/<employee_id>", methods=["GET"], endpoint="payroll_uninformed_leave")
    def payroll_uninformed_leave(employee_id: str):
        try:
            month, year = month_year_args()
            days = service.detect_uninformed_leave(employee_id, month, year)
        except DomainError as e:
            return domain_error_response(e)
        return ok([d.isoformat() for d in days])

    @app.route("/api/payroll/salary/<employee_id>", methods=["GET"], endpoint="payroll_salary")
    def payroll_salary(employee_id: str):
        try:
            details = service.get_salary_details(employee_id)
        except DomainError as e:
            return domain_error_response(e)
        return ok(details.to_dict())
