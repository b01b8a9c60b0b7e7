from __future__ import annotations

from typing import Optional

from ...attendance.model import AttendanceRecord
from ...core.enums import EntityType, Role
from ...tasks.model import Task
from ...teams.model import Team
from ...users.model import User
from .base import AccessPolicy

MANAGED_ROLES = (Role.MEMBER, Role.EXECUTIVE)


class AdminPolicy(AccessPolicy):
    """Full management of users, teams and tasks inside the active organization."""

    navigation = ("dashboard", "tasks", "attendance", "users", "teams")

    def navigation_for(self, user: User) -> tuple[str, ...]:
        if len(user.org_ids) > 1:
            return self.navigation + ("select-org",)
        return self.navigation

    def visible_org_ids(self, user: User, all_org_ids: list[str]) -> tuple[str, ...]:
        return tuple(org_id for org_id in all_org_ids if org_id in user.org_ids)

    def can_mutate(self, user: User, active_org_id: Optional[str], entity_type: EntityType, entity) -> bool:
        if not active_org_id or not user.belongs_to(active_org_id):
            return False
        if entity_type == EntityType.USER:
            # Every membership of the edited user must be one the admin holds too.
            return (
                entity.role in MANAGED_ROLES
                and entity.belongs_to(active_org_id)
                and set(entity.org_ids) <= set(user.org_ids)
            )
        if entity_type in (EntityType.TEAM, EntityType.TASK):
            return entity.org_id == active_org_id
        return False

    def can_reset_credentials(self, user: User, active_org_id: Optional[str], target: User) -> bool:
        return (
            bool(active_org_id)
            and user.belongs_to(active_org_id)
            and target.role != Role.SUPER_USER
            and target.belongs_to(active_org_id)
        )

    def can_view_org_metrics(self, user: User, active_org_id: Optional[str], org_id: str) -> bool:
        return org_id == active_org_id and user.belongs_to(org_id)

    def sees_user(self, user: User, active_org_id: Optional[str], other: User) -> bool:
        return other.belongs_to(active_org_id)

    def sees_team(self, user: User, active_org_id: Optional[str], team: Team) -> bool:
        return team.org_id == active_org_id

    def sees_task(self, user: User, active_org_id: Optional[str], task: Task) -> bool:
        return task.org_id == active_org_id

    def sees_attendance(self, user: User, active_org_id: Optional[str], record: AttendanceRecord) -> bool:
        return record.org_id == active_org_id
