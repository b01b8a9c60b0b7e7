from __future__ import annotations

from dataclasses import dataclass, field

from ..core.enums import Role
from .policies.admin_policy import AdminPolicy
from .policies.base import AccessPolicy
from .policies.executive_policy import ExecutivePolicy
from .policies.member_policy import MemberPolicy
from .policies.super_user_policy import SuperUserPolicy


@dataclass
class AccessPolicyFactory:
    """Factory Pattern: choose the access policy for a role."""

    policies: dict[Role, AccessPolicy] = field(
        default_factory=lambda: {
            Role.SUPER_USER: SuperUserPolicy(),
            Role.ADMIN: AdminPolicy(),
            Role.EXECUTIVE: ExecutivePolicy(),
            Role.MEMBER: MemberPolicy(),
        }
    )

    def for_role(self, role: Role) -> AccessPolicy:
        return self.policies[role]
