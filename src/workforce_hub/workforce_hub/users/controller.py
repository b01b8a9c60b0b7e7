from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import dump, json_body, load_actor, login_required, pop_version
from ..core.enums import Role
from ..container import Container

USER_FIELDS = ("first_name", "last_name", "email", "role", "org_ids", "team_id", "status", "must_change_password")


def register(app: Flask, container: Container) -> None:
    def _provisioned(result):
        # The one-time password is returned exactly once, here.
        return jsonify({"user": dump(result.user), "one_time_password": result.one_time_password}), 201

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @login_required
    def list_users():
        caps = load_actor(container)
        return jsonify(dump(container.access_resolver.visible_users(caps)))

    @app.route("/api/users", methods=["POST"], endpoint="create_user")
    @login_required
    def create_user():
        body = json_body()
        result = container.user_service.create_user(
            load_actor(container),
            first_name=body.get("first_name", ""),
            last_name=body.get("last_name", ""),
            email=body.get("email", ""),
            role=body.get("role") or Role.MEMBER,
            org_ids=body.get("org_ids"),
            team_id=body.get("team_id"),
            status=body.get("status") or "Office",
            password=body.get("password"),
        )
        return _provisioned(result)

    @app.route("/api/users/<user_id>", methods=["PUT"], endpoint="update_user")
    @login_required
    def update_user(user_id: str):
        body = json_body()
        version = pop_version(body)
        fields = {k: body[k] for k in USER_FIELDS if k in body}
        user = container.user_service.update_user(load_actor(container), user_id, expected_version=version, **fields)
        return jsonify(dump(user))

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @login_required
    def delete_user(user_id: str):
        container.user_service.delete_user(load_actor(container), user_id)
        return "", 204

    @app.route("/api/users/<user_id>/reset-key", methods=["POST"], endpoint="reset_security_key")
    @login_required
    def reset_security_key(user_id: str):
        credential = container.auth_service.reset_security_key(load_actor(container), user_id)
        return jsonify({"user_id": credential.user_id, "user_name": credential.user_name, "one_time_password": credential.otp})

    @app.route("/api/admins", methods=["GET"], endpoint="list_admins")
    @login_required
    def list_admins():
        caps = load_actor(container)
        admins = [u for u in container.access_resolver.visible_users(caps) if u.role == Role.ADMIN]
        return jsonify(dump(admins))

    @app.route("/api/admins", methods=["POST"], endpoint="create_admin")
    @login_required
    def create_admin():
        body = json_body()
        result = container.user_service.create_admin(
            load_actor(container),
            first_name=body.get("first_name", ""),
            last_name=body.get("last_name", ""),
            email=body.get("email", ""),
            org_ids=body.get("org_ids") or (),
            password=body.get("password"),
        )
        return _provisioned(result)

    @app.route("/api/admins/<user_id>", methods=["PUT"], endpoint="update_admin")
    @login_required
    def update_admin(user_id: str):
        body = json_body()
        version = pop_version(body)
        fields = {k: body[k] for k in USER_FIELDS if k in body and k != "role"}
        user = container.user_service.update_admin(load_actor(container), user_id, expected_version=version, **fields)
        return jsonify(dump(user))

    @app.route("/api/admins/<user_id>", methods=["DELETE"], endpoint="delete_admin")
    @login_required
    def delete_admin(user_id: str):
        container.user_service.delete_admin(load_actor(container), user_id)
        return "", 204
