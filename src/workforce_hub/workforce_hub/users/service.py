from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from werkzeug.security import generate_password_hash

from ..access.resolver import Capabilities
from ..auth.service import AuthService
from ..common.ids import new_entity_id
from ..common.validators import normalize_email, require_email, require_enum, require_non_empty
from ..common.versioning import bump, check_version
from ..core.enums import EntityType, Role, WorkStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..organizations.repository import OrganizationRepository
from ..organizations.service import AuditLog
from ..teams.repository import TeamRepository
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

# Stored until the one-time credential replaces it; never matches a password.
UNUSABLE_PASSWORD = "!"

GENERAL_ROLES = (Role.MEMBER, Role.EXECUTIVE)


@dataclass(frozen=True)
class ProvisionedUser:
    """A newly created account plus the one-time password to relay, if one was generated."""

    user: User
    one_time_password: Optional[str] = None


class UserService:
    """Use case: manage users (admins) and admin accounts (super-user)."""

    def __init__(
        self,
        users: UserRepository,
        teams: TeamRepository,
        organizations: OrganizationRepository,
        credentials: AuthService,
        *,
        audit: AuditLog | None = None,
        lock: threading.RLock | None = None,
    ):
        self._users = users
        self._teams = teams
        self._organizations = organizations
        self._credentials = credentials
        self._audit = audit
        self._lock = lock or threading.RLock()

    def get(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def _require_unique_email(self, email: str, *, exclude_id: Optional[str] = None) -> None:
        wanted = normalize_email(email)
        clash = self._users.list_by(lambda u: normalize_email(u.email) == wanted and u.id != exclude_id)
        if clash:
            raise ValidationError("Email is already registered")

    def _require_orgs(self, org_ids: Iterable[str]) -> tuple[str, ...]:
        ids = tuple(dict.fromkeys(org_ids))
        for org_id in ids:
            if not self._organizations.get_by_id(org_id):
                raise ValidationError(f"Organization {org_id} does not exist")
        return ids

    def _require_team(self, team_id: Optional[str], org_ids: tuple[str, ...]) -> Optional[str]:
        if not team_id:
            return None
        team = self._teams.get_by_id(team_id)
        if not team:
            raise ValidationError(f"Team {team_id} does not exist")
        if team.org_id not in org_ids:
            raise ValidationError("Team belongs to another organization")
        return team_id

    def _provision(self, actor: Capabilities, entity_type: EntityType, user: User, password: Optional[str]) -> ProvisionedUser:
        actor.require_mutate(entity_type, user)
        with self._lock:
            self._require_unique_email(user.email)
            if password:
                self._users.upsert(_with_password(user, password))
                otp = None
            else:
                self._users.upsert(user)
                otp = self._credentials.issue_one_time_credential(user.id).otp
            created = self.get(user.id)

        logger.info("User %s (%s) created by %s", created.id, created.role.value, actor.user.id)
        if self._audit:
            self._audit.record_many(created.org_ids, "USER", f"{created.name} added to registry")
        return ProvisionedUser(user=created, one_time_password=otp)

    def create_user(
        self,
        actor: Capabilities,
        *,
        first_name: str,
        last_name: str,
        email: str,
        role: Role | str = Role.MEMBER,
        org_ids: Optional[Iterable[str]] = None,
        team_id: Optional[str] = None,
        status: WorkStatus | str = WorkStatus.OFFICE,
        password: Optional[str] = None,
    ) -> ProvisionedUser:
        """Create a MEMBER or EXECUTIVE.

        The account always starts with ``must_change_password``; when no
        password is supplied a one-time code is generated and returned.
        """
        role = require_enum(role, Role, "Role")
        if role not in GENERAL_ROLES:
            raise ValidationError("Only MEMBER or EXECUTIVE accounts can be created here")

        if org_ids is None:
            org_ids = (actor.active_org_id,) if actor.active_org_id else ()
        orgs = self._require_orgs(org_ids)

        user = User(
            id=new_entity_id("user"),
            first_name=require_non_empty(first_name, "First name"),
            last_name=(last_name or "").strip(),
            email=require_email(email),
            password_hash=UNUSABLE_PASSWORD,
            role=role,
            org_ids=orgs,
            team_id=self._require_team(team_id, orgs),
            status=require_enum(status, WorkStatus, "Status"),
            must_change_password=True,
        )
        return self._provision(actor, EntityType.USER, user, password)

    def create_admin(
        self,
        actor: Capabilities,
        *,
        first_name: str,
        last_name: str,
        email: str,
        org_ids: Iterable[str] = (),
        password: Optional[str] = None,
    ) -> ProvisionedUser:
        user = User(
            id=new_entity_id("admin"),
            first_name=require_non_empty(first_name, "First name"),
            last_name=(last_name or "").strip(),
            email=require_email(email),
            password_hash=UNUSABLE_PASSWORD,
            role=Role.ADMIN,
            org_ids=self._require_orgs(org_ids),
            must_change_password=True,
        )
        return self._provision(actor, EntityType.ADMIN, user, password)

    def _update(self, actor: Capabilities, entity_type: EntityType, current: User, expected_version, **fields) -> User:
        actor.require_mutate(entity_type, current)
        check_version(current, expected_version)

        changes: dict = {}
        if fields.get("first_name") is not None:
            changes["first_name"] = require_non_empty(fields["first_name"], "First name")
        if fields.get("last_name") is not None:
            changes["last_name"] = fields["last_name"].strip()
        if fields.get("email") is not None:
            email = require_email(fields["email"])
            self._require_unique_email(email, exclude_id=current.id)
            changes["email"] = email
        if fields.get("role") is not None:
            changes["role"] = require_enum(fields["role"], Role, "Role")
        if fields.get("org_ids") is not None:
            changes["org_ids"] = self._require_orgs(fields["org_ids"])
        if fields.get("status") is not None:
            changes["status"] = require_enum(fields["status"], WorkStatus, "Status")
        if fields.get("must_change_password") is not None:
            changes["must_change_password"] = bool(fields["must_change_password"])
        if "team_id" in fields:
            changes["team_id"] = self._require_team(fields["team_id"], changes.get("org_ids", current.org_ids))

        updated = bump(current, **changes)
        # The edited user must still be within the actor's reach (no role escalation, no moving out of scope).
        actor.require_mutate(entity_type, updated)
        self._users.upsert(updated)
        logger.info("User %s updated by %s", updated.id, actor.user.id)
        return updated

    def update_user(self, actor: Capabilities, user_id: str, *, expected_version: Optional[int] = None, **fields) -> User:
        with self._lock:
            current = self.get(user_id)
            return self._update(actor, EntityType.USER, current, expected_version, **fields)

    def update_admin(self, actor: Capabilities, user_id: str, *, expected_version: Optional[int] = None, **fields) -> User:
        fields.pop("role", None)
        with self._lock:
            current = self.get(user_id)
            if current.role != Role.ADMIN:
                raise NotFoundError(f"Admin {user_id} not found")
            return self._update(actor, EntityType.ADMIN, current, expected_version, **fields)

    def delete_admin(self, actor: Capabilities, user_id: str) -> None:
        """Idempotent for missing ids; a non-admin id is NotFound here."""
        with self._lock:
            current = self._users.get_by_id(user_id)
            if current and current.role != Role.ADMIN:
                raise NotFoundError(f"Admin {user_id} not found")
            self.delete_user(actor, user_id)

    def delete_user(self, actor: Capabilities, user_id: str) -> None:
        """Idempotent. Team leads and task assignments pointing at the user are left dangling."""
        with self._lock:
            current = self._users.get_by_id(user_id)
            if not current:
                return
            entity_type = EntityType.ADMIN if current.role == Role.ADMIN else EntityType.USER
            actor.require_mutate(entity_type, current)
            self._users.remove(user_id)

        logger.info("User %s deleted by %s", user_id, actor.user.id)
        if self._audit:
            self._audit.record_many(current.org_ids, "USER", f"{current.name} removed from registry")


def _with_password(user: User, password: str) -> User:
    return replace(user, password_hash=generate_password_hash(password))
