from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import dump, json_body, load_actor, login_required, pop_version
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/teams", methods=["GET"], endpoint="list_teams")
    @login_required
    def list_teams():
        caps = load_actor(container)
        return jsonify(dump(container.access_resolver.visible_teams(caps)))

    @app.route("/api/teams", methods=["POST"], endpoint="create_team")
    @login_required
    def create_team():
        body = json_body()
        team = container.team_service.create(
            load_actor(container),
            name=body.get("name", ""),
            lead_id=body.get("lead_id"),
        )
        return jsonify(dump(team)), 201

    @app.route("/api/teams/<team_id>", methods=["PUT"], endpoint="update_team")
    @login_required
    def update_team(team_id: str):
        body = json_body()
        version = pop_version(body)
        fields = {k: body[k] for k in ("name", "lead_id") if k in body}
        team = container.team_service.update(load_actor(container), team_id, expected_version=version, **fields)
        return jsonify(dump(team))

    @app.route("/api/teams/<team_id>", methods=["DELETE"], endpoint="delete_team")
    @login_required
    def delete_team(team_id: str):
        container.team_service.delete(load_actor(container), team_id)
        return "", 204
