from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import TaskPriority, TaskStatus


@dataclass(frozen=True)
class Task:
    """Domain entity: Task.

    Any status may be set by an editor; there is no enforced TODO -> DONE order.
    """

    id: str
    title: str
    org_id: str
    description: str = ""
    assigned_to_ids: tuple[str, ...] = ()
    team_id: Optional[str] = None
    project_id: Optional[str] = None
    due_date: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    version: int = 1

    @property
    def is_done(self) -> bool:
        return self.status == TaskStatus.DONE
