from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import dump, json_body, load_actor, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @login_required
    def list_attendance():
        caps = load_actor(container)
        return jsonify(dump(container.access_resolver.visible_attendance(caps)))

    @app.route("/api/attendance/status", methods=["POST"], endpoint="update_my_status")
    @login_required
    def update_my_status():
        caps = load_actor(container)
        change = container.attendance_service.update_status(
            caps.user.id,
            json_body().get("status", ""),
            org_id=caps.active_org_id,
        )
        return jsonify({"user": dump(change.user), "record": dump(change.record)})

    @app.route("/api/attendance/history", endpoint="my_attendance_history")
    @login_required
    def my_attendance_history():
        caps = load_actor(container)
        return jsonify(dump(container.attendance_service.get_history(caps.user.id)))
