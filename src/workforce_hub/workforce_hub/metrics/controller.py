from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import dump, load_actor, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/metrics/executive", endpoint="executive_report")
    @login_required
    def executive_report():
        report = container.metrics_service.executive_report(load_actor(container), request.args.get("org_id"))
        return jsonify(report.to_dict())

    @app.route("/api/metrics/platform", endpoint="platform_report")
    @login_required
    def platform_report():
        return jsonify(container.metrics_service.platform_report(load_actor(container)).to_dict())

    @app.route("/api/metrics/attendance", endpoint="attendance_overview")
    @login_required
    def attendance_overview():
        rows = container.metrics_service.attendance_overview(load_actor(container), request.args.get("org_id"))
        return jsonify(dump(rows))

    @app.route("/api/metrics/dashboard", endpoint="dashboard_overview")
    @login_required
    def dashboard_overview():
        return jsonify(container.metrics_service.dashboard_overview(load_actor(container)).to_dict())

    @app.route("/api/metrics/summary", endpoint="executive_summary")
    @login_required
    async def executive_summary():
        actor = load_actor(container)
        summary = await container.summary_service.executive_summary(actor, request.args.get("org_id"))
        return jsonify({"summary": summary})
