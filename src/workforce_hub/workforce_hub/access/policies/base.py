from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import AttendanceRecord
from ...core.enums import EntityType
from ...tasks.model import Task
from ...teams.model import Team
from ...users.model import User


class AccessPolicy(ABC):
    """Strategy Pattern: what one role may see and change.

    ``user`` is the acting user, ``active_org_id`` the organization they are
    currently operating within (None for platform-wide roles).
    """

    navigation: tuple[str, ...] = ()

    def navigation_for(self, user: User) -> tuple[str, ...]:
        return self.navigation

    @abstractmethod
    def visible_org_ids(self, user: User, all_org_ids: list[str]) -> tuple[str, ...]:
        raise NotImplementedError

    def default_active_org(self, user: User, requested: Optional[str]) -> Optional[str]:
        if requested and user.belongs_to(requested):
            return requested
        return user.org_ids[0] if user.org_ids else None

    @abstractmethod
    def can_mutate(self, user: User, active_org_id: Optional[str], entity_type: EntityType, entity) -> bool:
        raise NotImplementedError

    def can_reset_credentials(self, user: User, active_org_id: Optional[str], target: User) -> bool:
        return False

    def can_view_org_metrics(self, user: User, active_org_id: Optional[str], org_id: str) -> bool:
        return False

    def can_view_platform_metrics(self, user: User) -> bool:
        return False

    def sees_user(self, user: User, active_org_id: Optional[str], other: User) -> bool:
        return other.id == user.id

    def sees_team(self, user: User, active_org_id: Optional[str], team: Team) -> bool:
        return False

    def sees_task(self, user: User, active_org_id: Optional[str], task: Task) -> bool:
        return False

    def sees_attendance(self, user: User, active_org_id: Optional[str], record: AttendanceRecord) -> bool:
        return False
