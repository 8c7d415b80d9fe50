from __future__ import annotations

from flask import Flask, request

from ..common.web import api_view, json_ok, request_data
from ..container import Container


def register(app: Flask, container: Container) -> None:
    api = api_view(container)
    service = container.profile_service

    @app.route("/api/profile", methods=["GET"], endpoint="api_my_profile")
    @api
    def my_profile(ctx):
        return json_ok(profile=service.to_ui(service.get_mine(ctx)), role=ctx.role.value)

    @app.route("/api/profile", methods=["PATCH"], endpoint="api_update_profile")
    @api
    def update_profile(ctx):
        data = request_data()
        service.update_contact(ctx, phone=data.get("phone"), address=data.get("address"))
        return json_ok(message="Profile updated")

    @app.route("/api/admin/employees", methods=["GET"], endpoint="api_employees")
    @api
    def employees(ctx):
        rows = service.list_employees(ctx, search=request.args.get("q", ""))
        return json_ok(employees=[service.employee_to_ui(r) for r in rows])

    @app.route("/api/admin/employees/<profile_id>", methods=["PATCH"], endpoint="api_update_employee")
    @api
    def update_employee(ctx, profile_id: str):
        data = request_data()
        service.admin_update(
            ctx,
            profile_id=profile_id,
            department=data.get("department"),
            position=data.get("position"),
            phone=data.get("phone"),
            address=data.get("address"),
        )
        return json_ok(message="Employee updated")
