from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import dump, json_body, load_actor, login_required, pop_version
from ..container import Container

TASK_FIELDS = ("title", "description", "assigned_to_ids", "team_id", "project_id", "due_date", "status", "priority")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/tasks", methods=["GET"], endpoint="list_tasks")
    @login_required
    def list_tasks():
        caps = load_actor(container)
        return jsonify(dump(container.access_resolver.visible_tasks(caps)))

    @app.route("/api/tasks", methods=["POST"], endpoint="create_task")
    @login_required
    def create_task():
        body = json_body()
        fields = {k: body[k] for k in TASK_FIELDS if k != "title" and body.get(k) is not None}
        task = container.task_service.create(load_actor(container), title=body.get("title", ""), **fields)
        return jsonify(dump(task)), 201

    @app.route("/api/tasks/<task_id>", methods=["PUT"], endpoint="update_task")
    @login_required
    def update_task(task_id: str):
        body = json_body()
        version = pop_version(body)
        fields = {k: body[k] for k in TASK_FIELDS if k in body}
        task = container.task_service.update(load_actor(container), task_id, expected_version=version, **fields)
        return jsonify(dump(task))

    @app.route("/api/tasks/<task_id>", methods=["DELETE"], endpoint="delete_task")
    @login_required
    def delete_task(task_id: str):
        container.task_service.delete(load_actor(container), task_id)
        return "", 204
