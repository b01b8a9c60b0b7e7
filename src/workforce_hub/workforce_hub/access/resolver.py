from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.enums import EntityType, Role
from ..core.exceptions import AuthorizationError
from ..organizations.model import Organization
from ..organizations.repository import OrganizationRepository
from ..tasks.model import Task
from ..tasks.repository import TaskRepository
from ..teams.model import Team
from ..teams.repository import TeamRepository
from ..users.model import User
from ..users.repository import UserRepository
from .factory import AccessPolicyFactory
from .policies.base import AccessPolicy


@dataclass(frozen=True)
class Capabilities:
    """What one user may see and do within their current working scope.

    Pure read model; the active organization itself is held by the caller.
    """

    user: User
    active_org_id: Optional[str]
    navigation: tuple[str, ...]
    visible_org_ids: tuple[str, ...]
    policy: AccessPolicy = field(repr=False, compare=False)

    @property
    def role(self) -> Role:
        return self.user.role

    def can_mutate(self, entity_type: EntityType, entity) -> bool:
        return self.policy.can_mutate(self.user, self.active_org_id, entity_type, entity)

    def require_mutate(self, entity_type: EntityType, entity) -> None:
        if not self.can_mutate(entity_type, entity):
            raise AuthorizationError(f"Not allowed to modify this {entity_type.name.lower()}")

    def can_reset_credentials(self, target: User) -> bool:
        return self.policy.can_reset_credentials(self.user, self.active_org_id, target)

    def can_view_org_metrics(self, org_id: Optional[str]) -> bool:
        return bool(org_id) and self.policy.can_view_org_metrics(self.user, self.active_org_id, org_id)

    def can_view_platform_metrics(self) -> bool:
        return self.policy.can_view_platform_metrics(self.user)


class AccessResolver:
    """Computes the visible and mutable subset of the store for a user."""

    def __init__(
        self,
        organizations: OrganizationRepository,
        users: UserRepository,
        teams: TeamRepository,
        tasks: TaskRepository,
        attendance: AttendanceRepository,
        *,
        policy_factory: AccessPolicyFactory | None = None,
    ):
        self._organizations = organizations
        self._users = users
        self._teams = teams
        self._tasks = tasks
        self._attendance = attendance
        self._factory = policy_factory or AccessPolicyFactory()

    def resolve(self, user: User, active_org_id: Optional[str] = None) -> Capabilities:
        policy = self._factory.for_role(user.role)
        all_org_ids = [o.id for o in self._organizations.list_all()]
        return Capabilities(
            user=user,
            active_org_id=policy.default_active_org(user, active_org_id),
            navigation=policy.navigation_for(user),
            visible_org_ids=policy.visible_org_ids(user, all_org_ids),
            policy=policy,
        )

    def select_org(self, user: User, org_id: str) -> Capabilities:
        """Switch the working organization of a multi-org user."""
        if user.role == Role.SUPER_USER or not user.belongs_to(org_id):
            raise AuthorizationError("You are not a member of this organization")
        return self.resolve(user, org_id)

    def visible_organizations(self, caps: Capabilities) -> list[Organization]:
        return self._organizations.list_by(lambda o: o.id in caps.visible_org_ids)

    def visible_users(self, caps: Capabilities) -> list[User]:
        return self._users.list_by(lambda u: caps.policy.sees_user(caps.user, caps.active_org_id, u))

    def visible_teams(self, caps: Capabilities) -> list[Team]:
        return self._teams.list_by(lambda t: caps.policy.sees_team(caps.user, caps.active_org_id, t))

    def visible_tasks(self, caps: Capabilities) -> list[Task]:
        return self._tasks.list_by(lambda t: caps.policy.sees_task(caps.user, caps.active_org_id, t))

    def visible_attendance(self, caps: Capabilities) -> list[AttendanceRecord]:
        return self._attendance.list_by(lambda r: caps.policy.sees_attendance(caps.user, caps.active_org_id, r))
