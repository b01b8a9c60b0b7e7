from __future__ import annotations

import pytest

from src.workforce_hub.workforce_hub.core.enums import TaskPriority, TaskStatus
from src.workforce_hub.workforce_hub.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


def test_create_task_defaults(container, as_user):
    task = container.task_service.create(
        as_user("admin-1"),
        title="Write docs",
        assigned_to_ids=["user-3"],
        team_id="team-1",
        project_id="proj-1",
        due_date="2024-07-01",
    )

    assert task.org_id == "org-1"
    assert task.status == TaskStatus.TODO
    assert task.priority == TaskPriority.MEDIUM
    assert container.store.organizations.get_by_id("org-1").logs[-1] == "[TASK] Write docs provisioned"


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": ""},
        {"assigned_to_ids": ["user-4"]},
        {"team_id": "team-2"},
        {"project_id": "proj-2"},
        {"due_date": "next tuesday"},
        {"priority": "Urgent"},
        {"status": "Blocked"},
    ],
)
def test_create_task_validates(container, as_user, overrides):
    fields = {"title": "Write docs", **overrides}

    with pytest.raises(ValidationError):
        container.task_service.create(as_user("admin-1"), **fields)


def test_status_can_move_in_any_order(container, as_user):
    admin = as_user("admin-1")

    done = container.task_service.update(admin, "task-3", expected_version=1, status="Todo")
    back = container.task_service.update(admin, "task-3", expected_version=2, status=TaskStatus.DONE)

    assert done.status == TaskStatus.TODO
    assert back.status == TaskStatus.DONE
    assert back.version == 3


def test_update_task_conflict(container, as_user):
    admin = as_user("admin-1")
    container.task_service.update(admin, "task-1", title="Init Vector v2")

    with pytest.raises(ConflictError):
        container.task_service.update(admin, "task-1", expected_version=1, title="Init Vector v3")


def test_update_missing_task_raises_not_found(container, as_user):
    with pytest.raises(NotFoundError):
        container.task_service.update(as_user("admin-1"), "task-404", title="Ghost")


def test_member_cannot_edit_tasks(container, as_user):
    with pytest.raises(AuthorizationError):
        container.task_service.update(as_user("user-3"), "task-1", status="Done")


def test_delete_task_is_idempotent(container, as_user):
    admin = as_user("admin-1", "org-2")

    container.task_service.delete(admin, "task-2")
    container.task_service.delete(admin, "task-2")

    assert container.store.tasks.get_by_id("task-2") is None
