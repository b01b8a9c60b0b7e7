from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import dump, json_body, load_actor, login_required, pop_version
from ..core.exceptions import AuthorizationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/organizations", methods=["GET"], endpoint="list_organizations")
    @login_required
    def list_organizations():
        caps = load_actor(container)
        return jsonify(dump(container.access_resolver.visible_organizations(caps)))

    @app.route("/api/organizations", methods=["POST"], endpoint="create_organization")
    @login_required
    def create_organization():
        body = json_body()
        org = container.organization_service.create(
            load_actor(container),
            name=body.get("name", ""),
            details=body.get("details", ""),
            admin_ids=body.get("admin_ids") or (),
            logs=body.get("logs"),
        )
        return jsonify(dump(org)), 201

    @app.route("/api/organizations/<org_id>", methods=["PUT"], endpoint="update_organization")
    @login_required
    def update_organization(org_id: str):
        body = json_body()
        org = container.organization_service.update(
            load_actor(container),
            org_id,
            expected_version=pop_version(body),
            name=body.get("name"),
            details=body.get("details"),
            admin_ids=body.get("admin_ids"),
        )
        return jsonify(dump(org))

    @app.route("/api/organizations/<org_id>", methods=["DELETE"], endpoint="delete_organization")
    @login_required
    def delete_organization(org_id: str):
        container.organization_service.delete(load_actor(container), org_id)
        return "", 204

    @app.route("/api/organizations/<org_id>/logs", methods=["GET"], endpoint="organization_logs")
    @login_required
    def organization_logs(org_id: str):
        caps = load_actor(container)
        if org_id not in caps.visible_org_ids:
            raise AuthorizationError("Not allowed to view this organization")
        return jsonify(list(container.organization_service.get(org_id).logs))
