from __future__ import annotations

from typing import Optional, Sequence

from ..access.resolver import AccessResolver, Capabilities
from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.constants import TOP_USERS_LIMIT
from ..core.enums import Role, WorkStatus
from ..core.exceptions import AuthorizationError, NotFoundError
from ..organizations.model import Organization
from ..organizations.repository import OrganizationRepository
from ..tasks.model import Task
from ..tasks.repository import TaskRepository
from ..teams.model import Team
from ..teams.repository import TeamRepository
from ..users.model import User
from ..users.repository import UserRepository
from .calculator.base import EfficiencyCalculator
from .calculator.completion_rate_calculator import CompletionRateCalculator
from .model import (
    AttendanceRow,
    DashboardOverview,
    ExecutiveReport,
    OrgStat,
    PlatformReport,
    TeamStat,
    UserStat,
)


def build_executive_report(
    org: Organization,
    users: Sequence[User],
    teams: Sequence[Team],
    tasks: Sequence[Task],
    records: Sequence[AttendanceRecord],
    *,
    calculator: EfficiencyCalculator,
    top_users: int = TOP_USERS_LIMIT,
) -> ExecutiveReport:
    records = [r for r in records if r.org_id == org.id]
    org_tasks = [t for t in tasks if t.org_id == org.id]

    team_stats = []
    for team in (t for t in teams if t.org_id == org.id):
        team_tasks = [t for t in org_tasks if t.team_id == team.id]
        completed = sum(1 for t in team_tasks if t.is_done)
        team_stats.append(
            TeamStat(
                team_id=team.id,
                name=team.name,
                completed=completed,
                total=len(team_tasks),
                efficiency=calculator.efficiency(completed, len(team_tasks)),
            )
        )

    user_stats = []
    for user in (u for u in users if u.belongs_to(org.id)):
        user_tasks = [t for t in org_tasks if user.id in t.assigned_to_ids]
        completed = sum(1 for t in user_tasks if t.is_done)
        user_stats.append(UserStat(user_id=user.id, name=user.name, completed=completed, total=len(user_tasks)))
    # sort() is stable: ties keep store order.
    user_stats.sort(key=lambda s: s.completed, reverse=True)

    return ExecutiveReport(
        org_id=org.id,
        org_name=org.name,
        office_hours=sum(r.hours_worked for r in records if r.status == WorkStatus.OFFICE),
        wfh_hours=sum(r.hours_worked for r in records if r.status == WorkStatus.WFH),
        leave_nodes=sum(1 for r in records if r.status == WorkStatus.LEAVE),
        team_stats=tuple(team_stats),
        user_stats=tuple(user_stats[:top_users]),
    )


def build_platform_report(orgs: Sequence[Organization], users: Sequence[User], tasks: Sequence[Task]) -> PlatformReport:
    admins = [u for u in users if u.role == Role.ADMIN]
    return PlatformReport(
        total_orgs=len(orgs),
        total_admins=len(admins),
        total_users=len(users),
        org_stats=tuple(
            OrgStat(
                org_id=org.id,
                name=org.name,
                tasks=sum(1 for t in tasks if t.org_id == org.id),
                users=sum(1 for u in users if u.belongs_to(org.id)),
                admins=sum(1 for u in admins if u.belongs_to(org.id)),
            )
            for org in orgs
        ),
    )


class MetricsService:
    """Derived views, recomputed from the store on every call."""

    def __init__(
        self,
        organizations: OrganizationRepository,
        users: UserRepository,
        teams: TeamRepository,
        tasks: TaskRepository,
        attendance: AttendanceRepository,
        resolver: AccessResolver,
        *,
        calculator: Optional[EfficiencyCalculator] = None,
    ):
        self._organizations = organizations
        self._users = users
        self._teams = teams
        self._tasks = tasks
        self._attendance = attendance
        self._resolver = resolver
        self._calculator = calculator or CompletionRateCalculator()

    def _org_in_scope(self, actor: Capabilities, org_id: Optional[str]) -> Organization:
        org_id = org_id or actor.active_org_id
        if not actor.can_view_org_metrics(org_id):
            raise AuthorizationError("Not allowed to view metrics for this organization")
        org = self._organizations.get_by_id(org_id)
        if not org:
            raise NotFoundError(f"Organization {org_id} not found")
        return org

    def executive_report(self, actor: Capabilities, org_id: Optional[str] = None) -> ExecutiveReport:
        org = self._org_in_scope(actor, org_id)
        return build_executive_report(
            org,
            self._users.list_all(),
            self._teams.list_all(),
            self._tasks.list_all(),
            self._attendance.list_all(),
            calculator=self._calculator,
        )

    def platform_report(self, actor: Capabilities) -> PlatformReport:
        if not actor.can_view_platform_metrics():
            raise AuthorizationError("Platform metrics are restricted to the super-user")
        return build_platform_report(self._organizations.list_all(), self._users.list_all(), self._tasks.list_all())

    def attendance_overview(self, actor: Capabilities, org_id: Optional[str] = None) -> list[AttendanceRow]:
        """Per member of the org: current status and hours summed over all their records."""
        org = self._org_in_scope(actor, org_id)
        records = self._attendance.list_all()
        return [
            AttendanceRow(
                user_id=u.id,
                name=u.name,
                status=u.status.value,
                total_hours=sum(r.hours_worked for r in records if r.user_id == u.id),
            )
            for u in self._users.list_by(lambda u: u.belongs_to(org.id))
        ]

    def dashboard_overview(self, actor: Capabilities) -> DashboardOverview:
        if actor.role == Role.SUPER_USER:
            raise AuthorizationError("Use the platform report")
        org = self._organizations.get_by_id(actor.active_org_id) if actor.active_org_id else None
        return DashboardOverview(
            org_id=org.id if org else None,
            org_name=org.name if org else None,
            task_count=len(self._resolver.visible_tasks(actor)),
            team_count=len(self._resolver.visible_teams(actor)),
            my_status=actor.user.status.value,
        )
