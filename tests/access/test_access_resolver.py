from __future__ import annotations

from dataclasses import replace

import pytest

from src.workforce_hub.workforce_hub.access.factory import AccessPolicyFactory
from src.workforce_hub.workforce_hub.access.policies.admin_policy import AdminPolicy
from src.workforce_hub.workforce_hub.access.policies.member_policy import MemberPolicy
from src.workforce_hub.workforce_hub.core.enums import EntityType, Role
from src.workforce_hub.workforce_hub.core.exceptions import AuthorizationError


def test_factory_returns_policy_per_role():
    factory = AccessPolicyFactory()

    assert isinstance(factory.for_role(Role.ADMIN), AdminPolicy)
    assert isinstance(factory.for_role(Role.MEMBER), MemberPolicy)


@pytest.mark.parametrize(
    "user_id, expected",
    [
        ("super-1", ("super", "entities", "admin_node")),
        ("admin-1", ("dashboard", "tasks", "attendance", "users", "teams", "select-org")),
        ("admin-2", ("dashboard", "tasks", "attendance", "users", "teams")),
        ("user-3", ("dashboard", "tasks")),
    ],
)
def test_navigation_by_role(as_user, user_id, expected):
    assert as_user(user_id).navigation == expected


def test_executive_navigation(container, as_user):
    user = container.store.users.get_by_id("user-5")
    container.store.users.upsert(replace(user, role=Role.EXECUTIVE))

    assert as_user("user-5").navigation == ("dashboard", "attendance")


def test_admin_in_second_org_sees_only_that_orgs_teams_and_tasks(container, as_user):
    caps = as_user("admin-1", "org-2")

    teams = container.access_resolver.visible_teams(caps)
    tasks = container.access_resolver.visible_tasks(caps)

    assert caps.active_org_id == "org-2"
    assert [t.id for t in teams] == ["team-2"]
    assert [t.id for t in tasks] == ["task-2"]
    assert all(t.org_id == "org-2" for t in teams + tasks)


def test_active_org_falls_back_to_first_membership(as_user):
    assert as_user("admin-2", "org-1").active_org_id == "org-2"
    assert as_user("admin-1").active_org_id == "org-1"


def test_super_user_has_no_active_org_and_sees_every_org(container, as_user):
    caps = as_user("super-1", "org-1")

    assert caps.active_org_id is None
    assert caps.visible_org_ids == ("org-1", "org-2")
    assert container.access_resolver.visible_tasks(caps) == []


def test_select_org_switches_scope(container):
    admin = container.store.users.get_by_id("admin-1")

    caps = container.access_resolver.select_org(admin, "org-2")

    assert caps.active_org_id == "org-2"


def test_select_org_rejects_foreign_org(container):
    admin = container.store.users.get_by_id("admin-2")

    with pytest.raises(AuthorizationError):
        container.access_resolver.select_org(admin, "org-1")


def test_member_sees_only_assigned_tasks_and_own_records(container, as_user):
    caps = as_user("user-5")

    assert [t.id for t in container.access_resolver.visible_tasks(caps)] == ["task-1"]
    assert [r.id for r in container.access_resolver.visible_attendance(caps)] == ["att-3"]
    assert [u.id for u in container.access_resolver.visible_users(caps)] == ["user-5"]


def test_super_user_sees_admins_and_self(container, as_user):
    visible = {u.id for u in container.access_resolver.visible_users(as_user("super-1"))}

    assert visible == {"super-1", "admin-1", "admin-2"}


def test_admin_cannot_mutate_other_org_or_admin_accounts(container, as_user):
    caps = as_user("admin-1", "org-1")
    store = container.store

    assert caps.can_mutate(EntityType.TEAM, store.teams.get_by_id("team-1"))
    assert not caps.can_mutate(EntityType.TEAM, store.teams.get_by_id("team-2"))
    assert not caps.can_mutate(EntityType.USER, store.users.get_by_id("admin-2"))
    assert not caps.can_mutate(EntityType.ORGANIZATION, store.organizations.get_by_id("org-1"))


def test_dangling_team_reference_is_filtered_not_an_error(container, as_user):
    container.store.teams.remove("team-1")

    caps = as_user("user-3")

    assert container.access_resolver.visible_teams(caps) == []
