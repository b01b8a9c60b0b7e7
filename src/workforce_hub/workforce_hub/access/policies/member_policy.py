from __future__ import annotations

from typing import Optional

from ...attendance.model import AttendanceRecord
from ...core.enums import EntityType
from ...tasks.model import Task
from ...teams.model import Team
from ...users.model import User
from .base import AccessPolicy


class MemberPolicy(AccessPolicy):
    """Own task list and own status only."""

    navigation = ("dashboard", "tasks")

    def visible_org_ids(self, user: User, all_org_ids: list[str]) -> tuple[str, ...]:
        return tuple(org_id for org_id in all_org_ids if org_id in user.org_ids)

    def can_mutate(self, user: User, active_org_id: Optional[str], entity_type: EntityType, entity) -> bool:
        return False

    def sees_team(self, user: User, active_org_id: Optional[str], team: Team) -> bool:
        return team.id == user.team_id and team.org_id == active_org_id

    def sees_task(self, user: User, active_org_id: Optional[str], task: Task) -> bool:
        return task.org_id == active_org_id and user.id in task.assigned_to_ids

    def sees_attendance(self, user: User, active_org_id: Optional[str], record: AttendanceRecord) -> bool:
        return record.user_id == user.id
