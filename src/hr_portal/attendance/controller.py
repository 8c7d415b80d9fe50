from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.web import api_view, json_ok
from ..container import Container
from ..core.enums import PeriodView
from ..core.exceptions import ValidationError


def _parse_view(value: str | None, default: PeriodView) -> PeriodView:
    if not value:
        return default
    try:
        return PeriodView(value)
    except ValueError:
        raise ValidationError(f"Unsupported view: {value}")


def register(app: Flask, container: Container) -> None:
    api = api_view(container)

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_check_in")
    @api
    def check_in(ctx):
        now = now_local()
        container.attendance_service.check_in(ctx, now=now)
        return json_ok(message="Checked in", check_in=now.isoformat())

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="api_check_out")
    @api
    def check_out(ctx):
        now = now_local()
        container.attendance_service.check_out(ctx, now=now)
        return json_ok(message="Checked out", check_out=now.isoformat())

    @app.route("/api/attendance", methods=["GET"], endpoint="api_my_attendance")
    @api
    def my_attendance(ctx):
        today = now_local().date()
        view = _parse_view(request.args.get("view"), PeriodView.WEEK)
        raw = request.args.get("date")
        selected = parse_iso_date(raw) if raw else today
        data = container.attendance_service.my_attendance(ctx, view=view, selected=selected, today=today)
        return json_ok(**data)

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="api_admin_attendance")
    @api
    def admin_attendance(ctx):
        view = _parse_view(request.args.get("view"), PeriodView.DAY)
        raw = request.args.get("date")
        selected = parse_iso_date(raw) if raw else now_local().date()
        user_id = (request.args.get("user_id") or "").strip() or None
        data = container.attendance_service.admin_attendance(ctx, view=view, selected=selected, user_id=user_id)
        return json_ok(**data)
