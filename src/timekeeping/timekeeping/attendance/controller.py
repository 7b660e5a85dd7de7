from __future__ import annotations

from flask import Flask

from ..common.http import body, json_endpoint, login_required, ok, session_user
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="api_clock_in")
    @json_endpoint
    def clock_in():
        record = service.clock_in(body().get("employeeId"))
        return ok(message="Clocked in", attendance=record.to_dict())

    @app.route("/api/attendance/pause", methods=["POST"], endpoint="api_pause")
    @json_endpoint
    def pause():
        record = service.pause(body().get("employeeId"))
        return ok(message="Paused", attendance=record.to_dict())

    @app.route("/api/attendance/resume", methods=["POST"], endpoint="api_resume")
    @json_endpoint
    def resume():
        record = service.resume(body().get("employeeId"))
        return ok(message="Resumed", attendance=record.to_dict())

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="api_clock_out")
    @json_endpoint
    def clock_out():
        result = service.clock_out(body().get("employeeId"))
        message = "Clocked out and submitted for approval" if result.has_manager else "Clocked out"
        return ok(message=message, **result.to_dict())

    @app.route("/api/attendance/submit", methods=["POST"], endpoint="api_submit_attendance")
    @json_endpoint
    def submit():
        data = body()
        record = service.submit_for_approval(data.get("employeeId"), data.get("approverUserId"))
        return ok(message="Submitted for approval", attendance=record.to_dict())

    @app.route("/api/attendance/<attendance_id>/approve", methods=["POST"], endpoint="api_approve_attendance")
    @login_required
    @json_endpoint
    def approve(attendance_id: str):
        record = service.approve(attendance_id, acting_user=session_user())
        return ok(message="Attendance approved", attendance=record.to_dict())

    @app.route("/api/attendance/<attendance_id>/reject", methods=["POST"], endpoint="api_reject_attendance")
    @login_required
    @json_endpoint
    def reject(attendance_id: str):
        record = service.reject(attendance_id, acting_user=session_user())
        return ok(message="Attendance rejected", attendance=record.to_dict())

    @app.route("/api/attendance/employee/<employee_ref>", methods=["GET"], endpoint="api_employee_attendance")
    @json_endpoint
    def employee_attendance(employee_ref: str):
        rows = service.list_for_employee(employee_ref)
        return ok(attendance=[r.to_dict() for r in rows])

    @app.route("/api/attendance/today/<employee_ref>", methods=["GET"], endpoint="api_today_session")
    @json_endpoint
    def today(employee_ref: str):
        return ok(**service.today(employee_ref).to_dict())

    @app.route("/api/attendance/approvals/<approver_id>", methods=["GET"], endpoint="api_pending_approvals")
    @json_endpoint
    def pending_approvals(approver_id: str):
        rows = service.list_pending_approvals(approver_id)
        return ok(attendance=[r.to_dict() for r in rows])

    @app.route("/api/attendance/approved", methods=["GET"], endpoint="api_approved_attendance")
    @login_required
    @json_endpoint
    def approved():
        rows = service.list_approved(session_user())
        return ok(attendance=[r.to_dict() for r in rows])
