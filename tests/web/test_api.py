from __future__ import annotations

from datetime import date

import pytest

from hr_portal.container import wire
from hr_portal.core.enums import AttendanceStatus, LeaveStatus
from hr_portal.main import create_app


@pytest.fixture()
def container(attendance_repo, leaves_repo, profiles_repo, roles_repo, payroll_repo):
    return wire(
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        profiles_repo=profiles_repo,
        roles_repo=roles_repo,
        payroll_repo=payroll_repo,
    )


@pytest.fixture()
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    app.config["TESTING"] = True
    return app


def _client(app, user_id):
    client = app.test_client()
    if user_id:
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
    return client


@pytest.fixture()
def employee(app):
    return _client(app, "u-emp")


@pytest.fixture()
def admin(app):
    return _client(app, "u-admin")


def test_health(app):
    resp = app.test_client().get("/health")
    assert resp.status_code == 200
    assert resp.get_json()["success"] is True


def test_missing_session_is_401(app):
    resp = app.test_client().get("/api/dashboard")
    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Authentication required"}


def test_check_in_then_check_out(employee, attendance_repo):
    assert employee.post("/api/attendance/check-in").status_code == 200
    resp = employee.post("/api/attendance/check-out")

    assert resp.status_code == 200
    (rec,) = attendance_repo.rows.values()
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.check_out is not None


def test_check_out_without_check_in_is_409(employee, attendance_repo):
    resp = employee.post("/api/attendance/check-out")

    assert resp.status_code == 409
    assert resp.get_json()["success"] is False
    assert attendance_repo.rows == {}


def test_my_attendance_week(employee):
    resp = employee.get("/api/attendance?view=week&date=2024-01-10")

    body = resp.get_json()
    assert resp.status_code == 200
    assert (body["start"], body["end"]) == ("2024-01-08", "2024-01-14")


def test_bad_view_and_date_are_400(employee):
    assert employee.get("/api/attendance?view=year").status_code == 400
    assert employee.get("/api/attendance?date=10-01-2024").status_code == 400


def test_admin_attendance_forbidden_for_employee(employee):
    assert employee.get("/api/admin/attendance").status_code == 403


def test_admin_attendance(admin):
    resp = admin.get("/api/admin/attendance?view=day&date=2024-01-08")

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["stats"]["total_employees"] == 2


def test_leave_flow(employee, admin, leaves_repo, attendance_repo):
    resp = employee.post(
        "/api/leaves",
        json={"leave_type_id": "lt-annual", "start_date": "2024-01-01", "end_date": "2024-01-03", "remarks": "trip"},
    )
    assert resp.status_code == 201
    rid = resp.get_json()["id"]

    pending = admin.get("/api/admin/leaves").get_json()["pending"]
    assert [r["id"] for r in pending] == [rid]
    assert pending[0]["days"] == 3

    resp = admin.post(f"/api/admin/leaves/{rid}/approve", json={"comment": "enjoy"})
    assert resp.status_code == 200
    assert resp.get_json()["days"] == 3
    assert leaves_repo.get(rid).status == LeaveStatus.APPROVED
    assert len(attendance_repo.rows) == 3

    again = admin.post(f"/api/admin/leaves/{rid}/approve")
    assert again.status_code == 400

    mine = employee.get("/api/leaves").get_json()["leaves"]
    assert mine[0]["status"] == "approved"


def test_submit_reversed_range_is_400(employee, leaves_repo):
    resp = employee.post(
        "/api/leaves", data={"leave_type_id": "lt-annual", "start_date": "2024-01-03", "end_date": "2024-01-01"}
    )
    assert resp.status_code == 400
    assert leaves_repo.requests == {}


def test_reject_unknown_leave_is_404(admin):
    assert admin.post("/api/admin/leaves/lr-404/reject").status_code == 404


def test_employee_cannot_approve(employee, leaves_repo):
    rid = leaves_repo.create(
        user_id="u-emp", leave_type_id="lt-annual", start_date=date(2024, 1, 1), end_date=date(2024, 1, 1), remarks=None
    )
    assert employee.post(f"/api/admin/leaves/{rid}/approve").status_code == 403


def test_leave_types(employee):
    body = employee.get("/api/leave-types").get_json()
    assert [t["name"] for t in body["leave_types"]] == ["Annual Leave", "Sick Leave"]


def test_profile_read_and_update(employee, profiles_repo):
    body = employee.get("/api/profile").get_json()
    assert body["profile"]["employee_id"] == "EMP002"
    assert body["role"] == "employee"

    resp = employee.patch("/api/profile", json={"phone": "555", "address": "Elm St"})
    assert resp.status_code == 200
    assert profiles_repo.profiles["p-2"].address == "Elm St"


def test_employee_directory(admin, employee):
    body = admin.get("/api/admin/employees?q=alice").get_json()
    assert [e["employee_id"] for e in body["employees"]] == ["EMP001"]
    assert employee.get("/api/admin/employees").status_code == 403


def test_admin_updates_employee(admin, profiles_repo):
    resp = admin.patch("/api/admin/employees/p-2", json={"department": "Ops", "position": "Lead"})
    assert resp.status_code == 200
    assert profiles_repo.profiles["p-2"].department == "Ops"
    assert admin.patch("/api/admin/employees/p-404", json={}).status_code == 409


def test_payroll_endpoints(admin, employee, payroll_repo):
    assert employee.get("/api/payroll").get_json()["payroll"]["net_salary"] == "2900.00"

    body = admin.get("/api/admin/payroll?q=EMP002").get_json()
    assert len(body["payroll"]) == 1
    assert body["total_net"] == "8200.00"

    resp = admin.patch("/api/admin/payroll/pr-2", json={"basic_salary": "3100", "allowances": "0", "deductions": "50"})
    assert resp.status_code == 200
    assert resp.get_json()["net_salary"] == "3050.00"

    bad = admin.patch("/api/admin/payroll/pr-2", json={"basic_salary": "-5"})
    assert bad.status_code == 400


def test_dashboard_by_role(admin, employee):
    assert "total_employees" in admin.get("/api/dashboard").get_json()
    body = employee.get("/api/dashboard").get_json()
    assert body["role"] == "employee"
    assert "my_pending_leaves" in body


def test_unexpected_error_is_500(employee, leaves_repo, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("db down")

    monkeypatch.setattr(leaves_repo, "list_types", boom)
    resp = employee.get("/api/leave-types")

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Internal server error"}


@pytest.mark.parametrize(
    "body",
    [
        {"leave_type_id": 7, "start_date": "2024-01-01", "end_date": "2024-01-02"},
        {"leave_type_id": "lt-annual", "start_date": "2024-01-01", "end_date": "2024-01-02", "remarks": 5},
        {"leave_type_id": "lt-annual", "start_date": 20240101, "end_date": "2024-01-02"},
    ],
)
def test_non_text_leave_fields_are_400(employee, leaves_repo, body):
    resp = employee.post("/api/leaves", json=body)

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
    assert leaves_repo.requests == {}


def test_non_text_profile_and_review_fields_are_400(employee, admin, leaves_repo, profiles_repo):
    assert employee.patch("/api/profile", json={"phone": 5551234}).status_code == 400
    assert admin.patch("/api/admin/employees/p-2", json={"department": ["Ops"]}).status_code == 400
    assert profiles_repo.profiles["p-2"].phone is None

    rid = leaves_repo.create(
        user_id="u-emp", leave_type_id="lt-annual", start_date=date(2024, 1, 1), end_date=date(2024, 1, 1), remarks=None
    )
    assert admin.post(f"/api/admin/leaves/{rid}/approve", json={"comment": 1}).status_code == 400
    assert leaves_repo.get(rid).status == LeaveStatus.PENDING
    assert leaves_repo.attendance.rows == {}
