from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Iterable, Optional

from ..access.resolver import Capabilities
from ..common.ids import new_entity_id
from ..common.validators import require_non_empty
from ..common.versioning import bump, check_version
from ..core.constants import ORG_SEED_LOG
from ..core.enums import EntityType
from ..core.exceptions import NotFoundError
from .model import Organization
from .repository import OrganizationRepository

logger = logging.getLogger(__name__)


class AuditLog:
    """Appends ``[SCOPE] message`` lines to an organization's log.

    Lines for an organization that no longer exists are dropped.
    """

    def __init__(self, organizations: OrganizationRepository, *, lock: threading.RLock | None = None):
        self._organizations = organizations
        self._lock = lock or threading.RLock()

    def record(self, org_id: Optional[str], scope: str, message: str) -> bool:
        if not org_id:
            return False
        line = f"[{scope.strip().upper()}] {message.strip()}"
        with self._lock:
            org = self._organizations.get_by_id(org_id)
            if not org:
                logger.debug("Audit line dropped for missing organization %s", org_id)
                return False
            self._organizations.upsert(replace(org, logs=org.logs + (line,)))
        return True

    def record_many(self, org_ids: Iterable[str], scope: str, message: str) -> None:
        for org_id in org_ids:
            self.record(org_id, scope, message)


class OrganizationService:
    """Use case: manage organizations (super-user)."""

    def __init__(self, organizations: OrganizationRepository, *, lock: threading.RLock | None = None):
        self._organizations = organizations
        self._lock = lock or threading.RLock()

    def get(self, org_id: str) -> Organization:
        org = self._organizations.get_by_id(org_id)
        if not org:
            raise NotFoundError(f"Organization {org_id} not found")
        return org

    def create(
        self,
        actor: Capabilities,
        *,
        name: str,
        details: str = "",
        admin_ids: Iterable[str] = (),
        logs: Optional[Iterable[str]] = None,
    ) -> Organization:
        org = Organization(
            id=new_entity_id("org"),
            name=require_non_empty(name, "Organization name"),
            details=(details or "").strip(),
            admin_ids=tuple(dict.fromkeys(admin_ids)),
            logs=tuple(logs) if logs else (ORG_SEED_LOG,),
        )
        actor.require_mutate(EntityType.ORGANIZATION, org)
        with self._lock:
            self._organizations.upsert(org)
        logger.info("Organization %s created by %s", org.id, actor.user.id)
        return org

    def update(
        self,
        actor: Capabilities,
        org_id: str,
        *,
        expected_version: Optional[int] = None,
        name: Optional[str] = None,
        details: Optional[str] = None,
        admin_ids: Optional[Iterable[str]] = None,
    ) -> Organization:
        with self._lock:
            current = self.get(org_id)
            actor.require_mutate(EntityType.ORGANIZATION, current)
            check_version(current, expected_version)

            changes: dict = {}
            if name is not None:
                changes["name"] = require_non_empty(name, "Organization name")
            if details is not None:
                changes["details"] = details.strip()
            if admin_ids is not None:
                changes["admin_ids"] = tuple(dict.fromkeys(admin_ids))

            updated = bump(current, **changes)
            self._organizations.upsert(updated)
        logger.info("Organization %s updated by %s", org_id, actor.user.id)
        return updated

    def delete(self, actor: Capabilities, org_id: str) -> None:
        """Idempotent. Users, teams and tasks that still reference the org are left as they are."""
        with self._lock:
            current = self._organizations.get_by_id(org_id)
            actor.require_mutate(EntityType.ORGANIZATION, current)
            if self._organizations.remove(org_id):
                logger.info("Organization %s deleted by %s", org_id, actor.user.id)
