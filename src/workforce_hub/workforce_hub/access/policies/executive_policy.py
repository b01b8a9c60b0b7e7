from __future__ import annotations

from typing import Optional

from ...attendance.model import AttendanceRecord
from ...core.enums import EntityType
from ...teams.model import Team
from ...users.model import User
from .base import AccessPolicy


class ExecutivePolicy(AccessPolicy):
    """Read-only metrics and attendance for the executive's organization."""

    navigation = ("dashboard", "attendance")

    def visible_org_ids(self, user: User, all_org_ids: list[str]) -> tuple[str, ...]:
        return tuple(org_id for org_id in all_org_ids if org_id in user.org_ids)

    def can_mutate(self, user: User, active_org_id: Optional[str], entity_type: EntityType, entity) -> bool:
        return False

    def can_view_org_metrics(self, user: User, active_org_id: Optional[str], org_id: str) -> bool:
        return org_id == active_org_id and user.belongs_to(org_id)

    def sees_user(self, user: User, active_org_id: Optional[str], other: User) -> bool:
        return other.belongs_to(active_org_id)

    def sees_team(self, user: User, active_org_id: Optional[str], team: Team) -> bool:
        return team.org_id == active_org_id

    def sees_attendance(self, user: User, active_org_id: Optional[str], record: AttendanceRecord) -> bool:
        return record.org_id == active_org_id
