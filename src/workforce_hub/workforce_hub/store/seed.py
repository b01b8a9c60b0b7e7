"""Demo data for a fresh process (two organizations, one super-user)."""

from __future__ import annotations

import logging

from werkzeug.security import generate_password_hash

from ..attendance.model import AttendanceRecord
from ..core.enums import Role, TaskPriority, TaskStatus, WorkStatus
from ..organizations.model import Organization
from ..tasks.model import Task
from ..teams.model import Project, Team
from ..users.model import User, split_display_name
from .entity_store import EntityStore

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"


def _user(id_, name, email, role, org_ids, *, team_id=None, status=WorkStatus.OFFICE, password_hash) -> User:
    first, last = split_display_name(name)
    return User(
        id=id_,
        first_name=first,
        last_name=last,
        email=email,
        password_hash=password_hash,
        role=role,
        org_ids=tuple(org_ids),
        team_id=team_id,
        status=status,
    )


def seed_demo_data(store: EntityStore, *, password: str = DEMO_PASSWORD) -> None:
    """Fill an empty store. Existing ids are overwritten."""
    password_hash = generate_password_hash(password)

    for org in (
        Organization(
            id="org-1",
            name="ForgeAcademy",
            details="Advanced Technology Training Center",
            admin_ids=("admin-1",),
            logs=("[SYS] Kernel Initialized", "[AUTH] Admin logged in", "[DATA] Sync complete", "[USER] Mike added to registry"),
        ),
        Organization(
            id="org-2",
            name="Ozone",
            details="Atmospheric Solutions Corp",
            admin_ids=("admin-1", "admin-2"),
            logs=("[SYS] Pressure sensors active", "[CRON] Nightly backup finished"),
        ),
    ):
        store.organizations.upsert(org)

    for user in (
        _user("super-1", "Matt C", "matt.c@forgeacademy.co.za", Role.SUPER_USER, [], password_hash=password_hash),
        _user("admin-1", "Forge Admin", "admin@example.com", Role.ADMIN, ["org-1", "org-2"], password_hash=password_hash),
        _user("admin-2", "Ozone Admin", "admin2@example.com", Role.ADMIN, ["org-2"], password_hash=password_hash),
        _user("user-3", "Charlie Member", "charlie@example.com", Role.MEMBER, ["org-1"], team_id="team-1", password_hash=password_hash),
        _user(
            "user-4", "Diana Member", "diana@example.com", Role.MEMBER, ["org-2"],
            team_id="team-2", status=WorkStatus.WFH, password_hash=password_hash,
        ),
        _user("user-5", "Mike", "mike@example.com", Role.MEMBER, ["org-1"], team_id="team-1", password_hash=password_hash),
    ):
        store.users.upsert(user)

    store.teams.upsert(Team(id="team-1", name="Forge Dev", org_id="org-1", lead_id="user-3"))
    store.teams.upsert(Team(id="team-2", name="Ozone Research", org_id="org-2", lead_id="user-4"))

    store.projects.upsert(
        Project(id="proj-1", name="AI Pilot", description="Internal testing", team_id="team-1", org_id="org-1", deadline="2024-07-01")
    )
    store.projects.upsert(
        Project(id="proj-2", name="Sky Net", description="Monitoring platform", team_id="team-2", org_id="org-2", deadline="2024-08-15")
    )

    for task in (
        Task(
            id="task-1", title="Init Vector", description="Database setup", assigned_to_ids=("user-3", "user-5"),
            team_id="team-1", org_id="org-1", due_date="2024-06-15",
            status=TaskStatus.IN_PROGRESS, priority=TaskPriority.HIGH,
        ),
        Task(
            id="task-2", title="Atmosphere Check", description="Sensor verify", assigned_to_ids=("user-4",),
            team_id="team-2", org_id="org-2", due_date="2024-06-10",
            status=TaskStatus.TODO, priority=TaskPriority.MEDIUM,
        ),
        Task(
            id="task-3", title="Frontend Polish", description="Final UI fixes", assigned_to_ids=("user-3",),
            team_id="team-1", org_id="org-1", due_date="2024-06-20",
            status=TaskStatus.DONE, priority=TaskPriority.MEDIUM,
        ),
    ):
        store.tasks.upsert(task)

    for rec in (
        AttendanceRecord(id="att-1", user_id="user-3", org_id="org-1", date="2024-06-10",
                         clock_in="2024-06-10T09:00:00Z", status=WorkStatus.OFFICE, hours_worked=8),
        AttendanceRecord(id="att-2", user_id="user-4", org_id="org-2", date="2024-06-10",
                         clock_in="2024-06-10T09:30:00Z", status=WorkStatus.WFH, hours_worked=7.5),
        AttendanceRecord(id="att-3", user_id="user-5", org_id="org-1", date="2024-06-10",
                         clock_in="2024-06-10T10:00:00Z", status=WorkStatus.OFFICE, hours_worked=6),
        AttendanceRecord(id="att-4", user_id="user-3", org_id="org-1", date="2024-06-11",
                         clock_in="2024-06-11T09:00:00Z", status=WorkStatus.LEAVE, hours_worked=0),
    ):
        store.attendance.upsert(rec)

    logger.info(
        "Demo data seeded (orgs=%d users=%d tasks=%d)",
        len(store.organizations), len(store.users), len(store.tasks),
    )
