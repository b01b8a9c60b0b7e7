from __future__ import annotations

import pytest

from src.workforce_hub.workforce_hub.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


def test_create_org_seeds_log(container, as_user):
    org = container.organization_service.create(as_user("super-1"), name="Nimbus", details="Cloud ops")

    assert org.logs == ("[SYS] Initialized",)
    assert org.version == 1
    assert container.store.organizations.get_by_id(org.id) == org


def test_only_super_user_creates_orgs(container, as_user):
    with pytest.raises(AuthorizationError):
        container.organization_service.create(as_user("admin-1"), name="Rogue")


def test_create_org_requires_name(container, as_user):
    with pytest.raises(ValidationError):
        container.organization_service.create(as_user("super-1"), name="   ")


def test_update_org_bumps_version_and_checks_it(container, as_user):
    super_user = as_user("super-1")

    updated = container.organization_service.update(super_user, "org-2", expected_version=1, details="Weather")

    assert updated.details == "Weather"
    assert updated.name == "Ozone"
    assert updated.version == 2
    with pytest.raises(ConflictError):
        container.organization_service.update(super_user, "org-2", expected_version=1, name="Ozone 2")


def test_update_missing_org_raises_not_found(container, as_user):
    with pytest.raises(NotFoundError):
        container.organization_service.update(as_user("super-1"), "org-404", name="Ghost")


def test_delete_org_tolerates_dangling_references(container, as_user):
    super_user = as_user("super-1")

    container.organization_service.delete(super_user, "org-2")

    store = container.store
    assert store.organizations.get_by_id("org-2") is None
    assert store.users.get_by_id("user-4").org_ids == ("org-2",)
    assert store.teams.get_by_id("team-2").org_id == "org-2"
    assert store.tasks.get_by_id("task-2").org_id == "org-2"


def test_delete_org_is_idempotent(container, as_user):
    super_user = as_user("super-1")

    container.organization_service.delete(super_user, "org-2")
    container.organization_service.delete(super_user, "org-2")
    container.organization_service.delete(super_user, "org-never")


def test_admin_still_resolves_after_org_deletion(container, as_user):
    container.organization_service.delete(as_user("super-1"), "org-2")

    caps = as_user("admin-2")

    assert caps.visible_org_ids == ()
    assert container.access_resolver.visible_organizations(caps) == []


def test_audit_line_for_missing_org_is_dropped(container):
    assert container.audit_log.record("org-1", "data", "Sync complete") is True
    assert container.audit_log.record("org-404", "DATA", "lost") is False
    assert container.store.organizations.get_by_id("org-1").logs[-1] == "[DATA] Sync complete"
