from __future__ import annotations

import logging
import threading
from typing import Optional

from ..access.resolver import Capabilities
from ..common.ids import new_entity_id
from ..common.validators import require_non_empty
from ..common.versioning import bump, check_version
from ..core.enums import EntityType
from ..core.exceptions import NotFoundError, ValidationError
from ..organizations.service import AuditLog
from ..users.repository import UserRepository
from .model import Team
from .repository import TeamRepository

logger = logging.getLogger(__name__)


class TeamService:
    def __init__(
        self,
        teams: TeamRepository,
        users: UserRepository,
        *,
        audit: AuditLog | None = None,
        lock: threading.RLock | None = None,
    ):
        self._teams = teams
        self._users = users
        self._audit = audit
        self._lock = lock or threading.RLock()

    def get(self, team_id: str) -> Team:
        team = self._teams.get_by_id(team_id)
        if not team:
            raise NotFoundError(f"Team {team_id} not found")
        return team

    def _require_lead(self, lead_id: Optional[str], org_id: str) -> Optional[str]:
        if not lead_id:
            return None
        lead = self._users.get_by_id(lead_id)
        if not lead or not lead.belongs_to(org_id):
            raise ValidationError("Team lead must be a member of the team's organization")
        return lead_id

    def create(
        self,
        actor: Capabilities,
        *,
        name: str,
        lead_id: Optional[str] = None,
        org_id: Optional[str] = None,
    ) -> Team:
        org_id = org_id or actor.active_org_id
        if not org_id:
            raise ValidationError("Select an organization first")

        team = Team(
            id=new_entity_id("team"),
            name=require_non_empty(name, "Team name"),
            org_id=org_id,
            lead_id=self._require_lead(lead_id, org_id),
        )
        actor.require_mutate(EntityType.TEAM, team)
        with self._lock:
            self._teams.upsert(team)

        logger.info("Team %s created in %s by %s", team.id, org_id, actor.user.id)
        if self._audit:
            self._audit.record(org_id, "TEAM", f"{team.name} initialized")
        return team

    def update(self, actor: Capabilities, team_id: str, *, expected_version: Optional[int] = None, **fields) -> Team:
        with self._lock:
            current = self.get(team_id)
            actor.require_mutate(EntityType.TEAM, current)
            check_version(current, expected_version)

            changes: dict = {}
            if fields.get("name") is not None:
                changes["name"] = require_non_empty(fields["name"], "Team name")
            if "lead_id" in fields:
                changes["lead_id"] = self._require_lead(fields["lead_id"], current.org_id)

            updated = bump(current, **changes)
            self._teams.upsert(updated)

        logger.info("Team %s updated by %s", team_id, actor.user.id)
        return updated

    def delete(self, actor: Capabilities, team_id: str) -> None:
        """Idempotent. Users and tasks keep their ``team_id``."""
        with self._lock:
            current = self._teams.get_by_id(team_id)
            if not current:
                return
            actor.require_mutate(EntityType.TEAM, current)
            self._teams.remove(team_id)

        logger.info("Team %s deleted by %s", team_id, actor.user.id)
        if self._audit:
            self._audit.record(current.org_id, "TEAM", f"{current.name} dissolved")
