from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

from ..access.resolver import Capabilities
from ..common.datetime_utils import parse_iso_date
from ..common.ids import new_entity_id
from ..common.validators import require_enum, require_non_empty
from ..common.versioning import bump, check_version
from ..core.enums import EntityType, TaskPriority, TaskStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..organizations.service import AuditLog
from ..teams.repository import ProjectRepository, TeamRepository
from ..users.repository import UserRepository
from .model import Task
from .repository import TaskRepository

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(
        self,
        tasks: TaskRepository,
        teams: TeamRepository,
        projects: ProjectRepository,
        users: UserRepository,
        *,
        audit: AuditLog | None = None,
        lock: threading.RLock | None = None,
    ):
        self._tasks = tasks
        self._teams = teams
        self._projects = projects
        self._users = users
        self._audit = audit
        self._lock = lock or threading.RLock()

    def get(self, task_id: str) -> Task:
        task = self._tasks.get_by_id(task_id)
        if not task:
            raise NotFoundError(f"Task {task_id} not found")
        return task

    def _require_team(self, team_id: Optional[str], org_id: str) -> Optional[str]:
        if not team_id:
            return None
        team = self._teams.get_by_id(team_id)
        if not team or team.org_id != org_id:
            raise ValidationError("Team must belong to the task's organization")
        return team_id

    def _require_project(self, project_id: Optional[str], org_id: str) -> Optional[str]:
        if not project_id:
            return None
        project = self._projects.get_by_id(project_id)
        if not project or project.org_id != org_id:
            raise ValidationError("Project must belong to the task's organization")
        return project_id

    def _require_assignees(self, user_ids: Iterable[str], org_id: str) -> tuple[str, ...]:
        ids = tuple(dict.fromkeys(user_ids or ()))
        for user_id in ids:
            user = self._users.get_by_id(user_id)
            if not user or not user.belongs_to(org_id):
                raise ValidationError(f"Assignee {user_id} is not a member of this organization")
        return ids

    @staticmethod
    def _require_due_date(value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        return parse_iso_date(value).isoformat()

    def create(
        self,
        actor: Capabilities,
        *,
        title: str,
        description: str = "",
        assigned_to_ids: Iterable[str] = (),
        team_id: Optional[str] = None,
        project_id: Optional[str] = None,
        due_date: Optional[str] = None,
        status: TaskStatus | str = TaskStatus.TODO,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        org_id: Optional[str] = None,
    ) -> Task:
        org_id = org_id or actor.active_org_id
        if not org_id:
            raise ValidationError("Select an organization first")

        task = Task(
            id=new_entity_id("task"),
            title=require_non_empty(title, "Task title"),
            org_id=org_id,
            description=(description or "").strip(),
            assigned_to_ids=self._require_assignees(assigned_to_ids, org_id),
            team_id=self._require_team(team_id, org_id),
            project_id=self._require_project(project_id, org_id),
            due_date=self._require_due_date(due_date),
            status=require_enum(status, TaskStatus, "Status"),
            priority=require_enum(priority, TaskPriority, "Priority"),
        )
        actor.require_mutate(EntityType.TASK, task)
        with self._lock:
            self._tasks.upsert(task)

        logger.info("Task %s created in %s by %s", task.id, org_id, actor.user.id)
        if self._audit:
            self._audit.record(org_id, "TASK", f"{task.title} provisioned")
        return task

    def update(self, actor: Capabilities, task_id: str, *, expected_version: Optional[int] = None, **fields) -> Task:
        """Any status may be set; there is no enforced transition order."""
        with self._lock:
            current = self.get(task_id)
            actor.require_mutate(EntityType.TASK, current)
            check_version(current, expected_version)
            org_id = current.org_id

            changes: dict = {}
            if fields.get("title") is not None:
                changes["title"] = require_non_empty(fields["title"], "Task title")
            if fields.get("description") is not None:
                changes["description"] = fields["description"].strip()
            if fields.get("assigned_to_ids") is not None:
                changes["assigned_to_ids"] = self._require_assignees(fields["assigned_to_ids"], org_id)
            if "team_id" in fields:
                changes["team_id"] = self._require_team(fields["team_id"], org_id)
            if "project_id" in fields:
                changes["project_id"] = self._require_project(fields["project_id"], org_id)
            if "due_date" in fields:
                changes["due_date"] = self._require_due_date(fields["due_date"])
            if fields.get("status") is not None:
                changes["status"] = require_enum(fields["status"], TaskStatus, "Status")
            if fields.get("priority") is not None:
                changes["priority"] = require_enum(fields["priority"], TaskPriority, "Priority")

            updated = bump(current, **changes)
            self._tasks.upsert(updated)

        logger.info("Task %s updated by %s", task_id, actor.user.id)
        return updated

    def delete(self, actor: Capabilities, task_id: str) -> None:
        with self._lock:
            current = self._tasks.get_by_id(task_id)
            if not current:
                return
            actor.require_mutate(EntityType.TASK, current)
            self._tasks.remove(task_id)

        logger.info("Task %s deleted by %s", task_id, actor.user.id)
        if self._audit:
            self._audit.record(current.org_id, "TASK", f"{current.title} terminated")
