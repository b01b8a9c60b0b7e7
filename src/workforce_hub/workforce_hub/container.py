from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, Optional

from .access.resolver import AccessResolver
from .attendance.service import AttendanceService
from .auth.service import AuthService
from .core.constants import DEFAULT_SUMMARY_TIMEOUT_SECONDS
from .metrics.service import MetricsService
from .organizations.service import AuditLog, OrganizationService
from .store.entity_store import EntityStore
from .store.seed import seed_demo_data
from .summary.client import DEFAULT_API_URL, DEFAULT_MODEL, SummaryClient
from .summary.service import SummaryService
from .tasks.service import TaskService
from .teams.service import TeamService
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    store: EntityStore

    access_resolver: AccessResolver
    audit_log: AuditLog

    auth_service: AuthService
    organization_service: OrganizationService
    user_service: UserService
    team_service: TeamService
    task_service: TaskService
    attendance_service: AttendanceService
    metrics_service: MetricsService
    summary_service: SummaryService


def build_container(
    *,
    summary_config: Optional[dict] = None,
    seed_demo: bool = False,
    store: Optional[EntityStore] = None,
    otp_generator: Optional[Callable[[], str]] = None,
    summary_client: Optional[SummaryClient] = None,
) -> Container:
    store = store or EntityStore()
    if seed_demo:
        seed_demo_data(store)

    # One writer lock for the whole store: read-modify-write sequences never interleave.
    lock = threading.RLock()

    access_resolver = AccessResolver(store.organizations, store.users, store.teams, store.tasks, store.attendance)
    audit_log = AuditLog(store.organizations, lock=lock)

    auth_service = AuthService(store.users, audit=audit_log, lock=lock, otp_generator=otp_generator)
    organization_service = OrganizationService(store.organizations, lock=lock)
    user_service = UserService(store.users, store.teams, store.organizations, auth_service, audit=audit_log, lock=lock)
    team_service = TeamService(store.teams, store.users, audit=audit_log, lock=lock)
    task_service = TaskService(store.tasks, store.teams, store.projects, store.users, audit=audit_log, lock=lock)
    attendance_service = AttendanceService(store.attendance, store.users, lock=lock)
    metrics_service = MetricsService(
        store.organizations,
        store.users,
        store.teams,
        store.tasks,
        store.attendance,
        access_resolver,
    )

    if summary_client is None:
        cfg = summary_config or {}
        summary_client = SummaryClient(
            cfg.get("api_key"),
            model=str(cfg.get("model") or DEFAULT_MODEL),
            api_url=str(cfg.get("api_url") or DEFAULT_API_URL),
            timeout=float(cfg.get("timeout") or DEFAULT_SUMMARY_TIMEOUT_SECONDS),
        )
    summary_service = SummaryService(metrics_service, summary_client)

    return Container(
        store=store,
        access_resolver=access_resolver,
        audit_log=audit_log,
        auth_service=auth_service,
        organization_service=organization_service,
        user_service=user_service,
        team_service=team_service,
        task_service=task_service,
        attendance_service=attendance_service,
        metrics_service=metrics_service,
        summary_service=summary_service,
    )
