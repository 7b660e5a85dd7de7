from __future__ import annotations

import pytest

from src.timekeeping.timekeeping.main import create_app

from tests.fakes import MAYA, NOOR


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def _login(client, user):
    with client.session_transaction() as sess:
        sess["user_id"] = user.user_id
        sess["role"] = user.role.value
        sess["name"] = user.full_name


def test_clock_in_and_out_flow(client):
    res = client.post("/api/attendance/clock-in", json={"employeeId": "EMP-002"})
    assert res.status_code == 200
    body = res.get_json()
    assert body["success"] is True
    assert body["attendance"]["employeeId"] == 2
    assert len(body["attendance"]["timestamps"]) == 1

    assert client.post("/api/attendance/pause", json={"employeeId": 2}).status_code == 200
    assert client.post("/api/attendance/resume", json={"employeeId": 2}).status_code == 200

    res = client.post("/api/attendance/clock-out", json={"employeeId": 2})
    body = res.get_json()
    assert res.status_code == 200
    assert body["hasManager"] is True
    assert body["managerId"] == MAYA.user_id
    assert body["attendance"]["status"] == "submitted"


def test_unknown_employee_is_404(client):
    res = client.post("/api/attendance/clock-in", json={"employeeId": "EMP-999"})
    assert res.status_code == 404
    assert res.get_json() == {"success": False, "message": "Employee not found"}


def test_missing_employee_id_is_400(client):
    res = client.post("/api/attendance/clock-in", json={})
    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_pause_without_attendance_is_404(client):
    res = client.post("/api/attendance/pause", json={"employeeId": 2})
    assert res.status_code == 404
    assert res.get_json()["message"] == "No active attendance"


def test_approve_requires_login(client):
    assert client.post("/api/attendance/1/approve").status_code == 401
    assert client.get("/api/attendance/approved").status_code == 401


def test_manager_approves_via_api(client):
    client.post("/api/attendance/clock-in", json={"employeeId": 2})
    attendance_id = client.post("/api/attendance/clock-out", json={"employeeId": 2}).get_json()["attendance"]["id"]

    pending = client.get(f"/api/attendance/approvals/{MAYA.user_id}").get_json()["attendance"]
    assert [row["id"] for row in pending] == [attendance_id]

    _login(client, NOOR)
    assert client.post(f"/api/attendance/{attendance_id}/approve").status_code == 403

    _login(client, MAYA)
    res = client.post(f"/api/attendance/{attendance_id}/approve")
    assert res.status_code == 200
    assert res.get_json()["attendance"]["status"] == "approved"

    assert client.post(f"/api/attendance/{attendance_id}/reject").status_code == 409

    approved = client.get("/api/attendance/approved").get_json()["attendance"]
    assert [row["id"] for row in approved] == [attendance_id]


def test_submit_and_today_endpoints(client):
    client.post("/api/attendance/clock-in", json={"employeeId": "EMP-003"})
    client.post("/api/attendance/clock-out", json={"employeeId": "EMP-003"})

    res = client.post("/api/attendance/submit", json={"employeeId": "EMP-003", "approverUserId": "1"})
    assert res.status_code == 200
    assert res.get_json()["attendance"]["approverId"] == 1

    today = client.get("/api/attendance/today/EMP-003").get_json()
    assert today["state"] == "closed"

    history = client.get("/api/attendance/employee/3").get_json()["attendance"]
    assert len(history) == 1


def test_payroll_endpoints(client):
    sheet = client.get("/api/payroll/attendance-sheet/EMP-002?month=3&year=2024")
    assert sheet.status_code == 200
    assert sheet.get_json()["summary"]["totalWorkingDays"] == 25

    generated = client.post("/api/payroll/generate/EMP-002", json={"month": 3, "year": 2024}).get_json()
    assert generated["payslip"]["grossPay"] == 85000.0
    assert generated["payslip"]["month"] == "03"

    fetched = client.get("/api/payroll/payslip/2?month=3&year=2024").get_json()
    assert fetched["payslip"]["netPay"] == generated["payslip"]["netPay"]

    issued = client.post("/api/payroll/payslips/2/issue", json={"month": 3, "year": 2024})
    assert issued.status_code == 201
    assert issued.get_json()["payslip"]["id"] == 1

    listed = client.get("/api/payroll/payslips/EMP-002").get_json()["payslips"]
    assert [p["id"] for p in listed] == [1]


def test_invalid_month_is_400(client):
    res = client.get("/api/payroll/attendance-sheet/2?month=13&year=2024")
    assert res.status_code == 400
    assert res.get_json()["message"] == "month must be between 1 and 12"


def test_unexpected_error_is_500(client, container, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("db down")

    monkeypatch.setattr(container.payroll_service, "list_payslips", boom)

    res = client.get("/api/payroll/payslips/2")
    assert res.status_code == 500
    assert res.get_json() == {"success": False, "message": "Internal server error: db down"}


def test_clock_in_on_approved_day_is_409(client):
    client.post("/api/attendance/clock-in", json={"employeeId": 2})
    attendance_id = client.post("/api/attendance/clock-out", json={"employeeId": 2}).get_json()["attendance"]["id"]
    _login(client, MAYA)
    client.post(f"/api/attendance/{attendance_id}/approve")

    res = client.post("/api/attendance/clock-in", json={"employeeId": 2})
    assert res.status_code == 409
    assert res.get_json()["success"] is False

    today = client.get("/api/attendance/today/2").get_json()
    assert today["attendance"]["status"] == "approved"
