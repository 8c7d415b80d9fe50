from __future__ import annotations

from flask import Flask, request

from ..common.web import api_view, json_ok, request_data
from ..container import Container


def register(app: Flask, container: Container) -> None:
    api = api_view(container)
    service = container.payroll_service

    @app.route("/api/payroll", methods=["GET"], endpoint="api_my_payroll")
    @api
    def my_payroll(ctx):
        record = service.get_mine(ctx)
        return json_ok(payroll=service.to_ui(record) if record else None)

    @app.route("/api/admin/payroll", methods=["GET"], endpoint="api_payroll_list")
    @api
    def payroll_list(ctx):
        data = service.list_all(ctx, search=request.args.get("q", ""))
        return json_ok(
            payroll=[service.row_to_ui(r) for r in data["rows"]],
            total_net=f"{data['total_net']:.2f}",
        )

    @app.route("/api/admin/payroll/<payroll_id>", methods=["PATCH"], endpoint="api_update_payroll")
    @api
    def update_payroll(ctx, payroll_id: str):
        data = request_data()
        net = service.update(
            ctx,
            payroll_id=payroll_id,
            basic_salary=data.get("basic_salary"),
            allowances=data.get("allowances"),
            deductions=data.get("deductions"),
        )
        return json_ok(message="Payroll updated", net_salary=f"{net:.2f}")
