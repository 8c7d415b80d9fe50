from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_text
from ..common.web import api_view, json_ok, request_data
from ..container import Container


def register(app: Flask, container: Container) -> None:
    api = api_view(container)
    service = container.leave_service

    @app.route("/api/leave-types", methods=["GET"], endpoint="api_leave_types")
    @api
    def leave_types(ctx):
        return json_ok(leave_types=[service.type_to_ui(t) for t in service.list_leave_types()])

    @app.route("/api/leaves", methods=["GET"], endpoint="api_my_leaves")
    @api
    def my_leaves(ctx):
        return json_ok(leaves=[service.to_ui(r) for r in service.list_mine(ctx)])

    @app.route("/api/leaves", methods=["POST"], endpoint="api_submit_leave")
    @api
    def submit_leave(ctx):
        data = request_data()
        start = data.get("start_date")
        end = data.get("end_date")
        request_id = service.submit(
            ctx,
            leave_type_id=optional_text(data.get("leave_type_id"), "Leave type"),
            start_date=parse_iso_date(start) if start else None,
            end_date=parse_iso_date(end) if end else None,
            remarks=data.get("remarks"),
        )
        return json_ok(message="Leave request submitted", id=request_id), 201

    @app.route("/api/admin/leaves", methods=["GET"], endpoint="api_review_leaves")
    @api
    def review_leaves(ctx):
        data = service.list_for_review(ctx)
        return json_ok(
            pending=[service.to_ui(r) for r in data["pending"]],
            processed=[service.to_ui(r) for r in data["processed"]],
        )

    @app.route("/api/admin/leaves/<request_id>/approve", methods=["POST"], endpoint="api_approve_leave")
    @api
    def approve_leave(ctx, request_id: str):
        days = service.approve(ctx, request_id=request_id, comment=request_data().get("comment"))
        return json_ok(message="Leave request approved", days=days)

    @app.route("/api/admin/leaves/<request_id>/reject", methods=["POST"], endpoint="api_reject_leave")
    @api
    def reject_leave(ctx, request_id: str):
        service.reject(ctx, request_id=request_id, comment=request_data().get("comment"))
        return json_ok(message="Leave request rejected")
