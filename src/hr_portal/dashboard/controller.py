from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import now_local
from ..common.web import api_view, json_ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    api = api_view(container)

    @app.route("/api/dashboard", methods=["GET"], endpoint="api_dashboard")
    @api
    def dashboard(ctx):
        data = container.dashboard_service.summary(ctx, now_local().date())
        return json_ok(role=ctx.role.value, **data)
