from __future__ import annotations

from typing import Optional

from ...core.enums import EntityType, Role
from ...users.model import User
from .base import AccessPolicy


class SuperUserPolicy(AccessPolicy):
    """Platform-wide: organizations and admin provisioning, no team/task/attendance scope."""

    navigation = ("super", "entities", "admin_node")

    def visible_org_ids(self, user: User, all_org_ids: list[str]) -> tuple[str, ...]:
        return tuple(all_org_ids)

    def default_active_org(self, user: User, requested: Optional[str]) -> Optional[str]:
        return None

    def can_mutate(self, user: User, active_org_id: Optional[str], entity_type: EntityType, entity) -> bool:
        if entity_type == EntityType.ORGANIZATION:
            return True
        if entity_type in (EntityType.ADMIN, EntityType.USER):
            return getattr(entity, "role", None) == Role.ADMIN
        return False

    def can_reset_credentials(self, user: User, active_org_id: Optional[str], target: User) -> bool:
        return target.role == Role.ADMIN

    def can_view_platform_metrics(self, user: User) -> bool:
        return True

    def sees_user(self, user: User, active_org_id: Optional[str], other: User) -> bool:
        return other.id == user.id or other.role == Role.ADMIN
