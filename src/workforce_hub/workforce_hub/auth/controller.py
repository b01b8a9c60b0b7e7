from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import dump, json_body, load_actor, login_required
from ..core.exceptions import AuthorizationError
from ..container import Container
from .service import SessionUser


def register(app: Flask, container: Container) -> None:
    def _start_session(s_user: SessionUser) -> None:
        session.clear()
        session["user_id"] = s_user.user_id
        session["role"] = s_user.role.value
        session["active_org_id"] = s_user.active_org_id

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        result = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))

        if result.rotation_required:
            session.clear()
            session["pending_rotation_user_id"] = result.user.id
            return jsonify({"rotation_required": True}), 202

        _start_session(result.session)
        return jsonify({"rotation_required": False, "session": dump(result.session)})

    @app.route("/api/auth/rotate", methods=["POST"], endpoint="rotate_password")
    def rotate_password():
        user_id = session.get("pending_rotation_user_id")
        if not user_id:
            raise AuthorizationError("No password rotation in progress")

        s_user = container.auth_service.finalize_rotation(user_id, json_body().get("new_password", ""))
        _start_session(s_user)
        return jsonify({"session": dump(s_user)})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"ok": True})

    @app.route("/api/auth/me", endpoint="me")
    @login_required
    def me():
        caps = load_actor(container)
        return jsonify(
            {
                "user": dump(caps.user),
                "active_org_id": caps.active_org_id,
                "navigation": list(caps.navigation),
                "visible_org_ids": list(caps.visible_org_ids),
            }
        )

    @app.route("/api/auth/select-org", methods=["POST"], endpoint="select_org")
    @login_required
    def select_org():
        caps = load_actor(container)
        caps = container.access_resolver.select_org(caps.user, json_body().get("org_id", ""))
        session["active_org_id"] = caps.active_org_id
        return jsonify({"active_org_id": caps.active_org_id, "navigation": list(caps.navigation)})
