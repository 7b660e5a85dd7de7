from __future__ import annotations

from flask import Flask, request

from ..common.http import body, json_endpoint, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/api/payroll/attendance-sheet/<employee_ref>", methods=["GET"], endpoint="api_attendance_sheet")
    @json_endpoint
    def attendance_sheet(employee_ref: str):
        sheet = service.attendance_sheet(employee_ref, request.args.get("month"), request.args.get("year"))
        return ok(**sheet.to_dict())

    @app.route("/api/payroll/generate/<employee_ref>", methods=["POST"], endpoint="api_generate_payslip")
    @json_endpoint
    def generate_payslip(employee_ref: str):
        data = body()
        payslip = service.generate_payslip(employee_ref, data.get("month"), data.get("year"))
        return ok(payslip=payslip.to_dict())

    @app.route("/api/payroll/payslip/<employee_ref>", methods=["GET"], endpoint="api_get_payslip")
    @json_endpoint
    def get_payslip(employee_ref: str):
        payslip = service.get_payslip(employee_ref, request.args.get("month"), request.args.get("year"))
        return ok(payslip=payslip.to_dict())

    @app.route("/api/payroll/payslips/<employee_ref>/issue", methods=["POST"], endpoint="api_issue_payslip")
    @json_endpoint
    def issue_payslip(employee_ref: str):
        data = body()
        payslip = service.issue_payslip(employee_ref, data.get("month"), data.get("year"))
        return ok(201, message="Payslip issued", payslip=payslip.to_dict())

    @app.route("/api/payroll/payslips/<employee_ref>", methods=["GET"], endpoint="api_list_payslips")
    @json_endpoint
    def list_payslips(employee_ref: str):
        return ok(payslips=[p.to_dict() for p in service.list_payslips(employee_ref)])
