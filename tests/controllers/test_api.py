from __future__ import annotations

from datetime import date, datetime

import pytest

from src.payroll_system.payroll_system.container import wire_services
from src.payroll_system.payroll_system.core.enums import LeaveCategory
from src.payroll_system.payroll_system.core.settings import PayrollSettings
from src.payroll_system.payroll_system.leave import controller as leave_controller
from src.payroll_system.payroll_system.main import create_app
from tests.fakes import FakeEmployeeRepo, FakeLeaveRepo, FakePayrollRepo, make_employee, make_leave


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    container = wire_services(
        settings=PayrollSettings(),
        leave_repo=FakeLeaveRepo(
            [make_leave(1, leave_type=LeaveCategory.UNPAID, start=date(2025, 1, 6), end=date(2025, 1, 10))]
        ),
        payroll_repo=FakePayrollRepo(),
        employee_repo=FakeEmployeeRepo([make_employee("E1")]),
    )
    app = create_app(container)
    return app.test_client()


def _login(client, user_id, role):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


PAYROLL = {
    "employee_id": "E1",
    "month": 1,
    "year": 2025,
    "basic_salary": "500",
    "transport_allowance": "50",
    "national_insurance": "20",
    "income_tax": "30",
    "days_worked": 26,
    "days_absent": 0,
    "exchange_rate": "0",
}


def test_requests_without_session_are_rejected(client):
    resp = client.get("/api/leave/requests")
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_employee_submits_and_lists_own_leave(client):
    _login(client, "E1", "employee")
    resp = client.post(
        "/api/leave/requests",
        json={"leave_type": "sick", "start_date": "2025-02-03", "end_date": "2025-02-04"},
    )
    assert resp.status_code == 201

    listed = client.get("/api/leave/requests?status=pending").get_json()
    assert [r["total_days"] for r in listed["requests"]] == [2]


def test_invalid_leave_submission_returns_all_errors(client):
    _login(client, "E1", "employee")
    resp = client.post("/api/leave/requests", json={"start_date": "2025-02-04", "end_date": "2025-02-03"})
    body = resp.get_json()

    assert resp.status_code == 400
    assert body["errors"] == ["Leave type is required", "End date cannot be before start date"]


def test_employee_cannot_approve(client):
    _login(client, "E1", "employee")
    assert client.post("/api/leave/requests/1/approve").status_code == 403


def test_hr_approves_pending_request_once(client):
    _login(client, "E1", "employee")
    rid = client.post(
        "/api/leave/requests",
        json={"leave_type": "casual", "start_date": "2025-03-03", "end_date": "2025-03-03"},
    ).get_json()["request_id"]

    _login(client, "H1", "hr")
    assert client.post(f"/api/leave/requests/{rid}/approve", json={"comments": "ok"}).status_code == 200

    again = client.post(f"/api/leave/requests/{rid}/reject")
    assert again.status_code == 400
    assert again.get_json()["message"] == "Leave request has already been processed"

    assert client.post("/api/leave/requests/999/approve").status_code == 404


def test_leave_summary_and_balance(client):
    _login(client, "E1", "employee")
    summary = client.get("/api/employees/E1/leave-summary?month=1&year=2025").get_json()
    assert summary["unpaid_leave_days"] == 5
    assert summary["available"] is True

    balance = client.get("/api/employees/E1/leave-balance?year=2025").get_json()
    assert balance["taken"] == 5
    assert balance["remaining"] == 16

    assert client.get("/api/employees/E2/leave-summary?month=1&year=2025").status_code == 403


def test_payroll_calculation_returns_two_decimal_strings(client):
    _login(client, "H1", "hr")
    body = client.post("/api/payroll/calculate", json=PAYROLL).get_json()

    assert body["gross_salary"] == "550.00"
    assert body["total_deductions"] == "50.00"
    assert body["net_salary"] == "500.00"


def test_payroll_creation_validates(client):
    _login(client, "H1", "hr")
    resp = client.post("/api/payroll", json={**PAYROLL, "basic_salary": "0"})
    assert resp.status_code == 400
    assert "Basic salary must be greater than 0" in resp.get_json()["errors"]


def test_payslip_without_rate_shows_unavailable_local_amounts(client):
    _login(client, "H1", "hr")
    pid = client.post("/api/payroll", json=PAYROLL).get_json()["payroll"]["payroll_id"]

    _login(client, "E1", "employee")
    slip = client.get(f"/api/payroll/{pid}/payslip").get_json()["payslip"]
    assert slip["net_pay"] == {"anchor": "500.00", "local": "N/A"}
    assert slip["leave_summary"][1] == {"label": "Unpaid Leave", "opening_balance": None, "taken": 5, "closing_balance": None}


def test_payment_workflow(client):
    _login(client, "H1", "hr")
    pid = client.post("/api/payroll", json=PAYROLL).get_json()["payroll"]["payroll_id"]

    assert client.post(f"/api/payroll/{pid}/process").get_json()["payroll"]["payment_status"] == "processed"
    paid = client.post(f"/api/payroll/{pid}/pay", json={"payment_date": "2025-02-01", "payment_method": "bank"})
    assert paid.get_json()["payroll"]["payment_date"] == "2025-02-01"
    assert client.post(f"/api/payroll/{pid}/process").status_code == 400


def test_attendance_suggestion(client):
    _login(client, "H1", "hr")
    body = client.get("/api/payroll/attendance-suggestion?employee_id=E1&month=1&year=2025").get_json()
    assert body["days_absent"] == 5
    assert body["days_worked"] == 26

    assert client.get("/api/payroll/attendance-suggestion?employee_id=E1").status_code == 400


def test_bulk_payslips(client):
    _login(client, "H1", "hr")
    client.post("/api/payroll", json=PAYROLL)
    body = client.post("/api/payslips/bulk", json={"month": 1, "year": 2025}).get_json()
    assert len(body["payslips"]) == 1
    assert body["errors"] == {}


def test_leave_summary_defaults_to_current_month(client, monkeypatch):
    monkeypatch.setattr(leave_controller, "now_local", lambda: datetime(2025, 1, 20, 9, 0))
    _login(client, "E1", "employee")

    body = client.get("/api/employees/E1/leave-summary").get_json()
    assert (body["month"], body["year"]) == (1, 2025)
    assert body["unpaid_leave_days"] == 5


def test_non_finite_amounts_are_validation_errors(client):
    _login(client, "H1", "hr")

    resp = client.post("/api/payroll/calculate", json={**PAYROLL, "basic_salary": "NaN"})
    assert resp.status_code == 400
    assert resp.get_json()["errors"] == ["Basic salary must be a number"]

    resp = client.post("/api/payroll", json={**PAYROLL, "exchange_rate": "NaN"})
    assert resp.status_code == 400
    assert resp.get_json()["errors"] == ["Exchange rate must be a number"]


def test_period_listing_with_summary(client):
    _login(client, "H1", "hr")
    client.post("/api/payroll", json=PAYROLL)

    body = client.get("/api/payroll?month=1&year=2025").get_json()
    assert [p["employee_id"] for p in body["payrolls"]] == ["E1"]
    assert body["summary"]["total_net"] == "500.00"
    assert body["summary"]["status_counts"]["pending"] == 1

    assert client.get("/api/payroll?month=1").status_code == 400

    _login(client, "E1", "employee")
    assert client.get("/api/payroll?month=1&year=2025").status_code == 403


def test_period_export_is_csv(client):
    _login(client, "H1", "hr")
    client.post("/api/payroll", json={**PAYROLL, "exchange_rate": "2"})

    resp = client.get("/api/payroll/export?month=1&year=2025")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    lines = resp.get_data(as_text=True).splitlines()
    assert lines[0].split(",")[:2] == ["Employee ID", "Employee Name"]
    assert "1000.00" in lines[1]


def test_other_employee_cannot_read_payslip(client):
    _login(client, "H1", "hr")
    pid = client.post("/api/payroll", json=PAYROLL).get_json()["payroll"]["payroll_id"]

    _login(client, "E2", "employee")
    assert client.get(f"/api/payroll/{pid}/payslip").status_code == 403
    assert client.get("/api/payroll/999/payslip").status_code == 404
