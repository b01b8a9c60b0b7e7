from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class TeamStat:
    team_id: str
    name: str
    completed: int
    total: int
    efficiency: int


@dataclass(frozen=True)
class UserStat:
    user_id: str
    name: str
    completed: int
    total: int


@dataclass(frozen=True)
class ExecutiveReport:
    """Attendance and task metrics for one organization."""

    org_id: str
    org_name: str
    office_hours: float
    wfh_hours: float
    leave_nodes: int
    team_stats: tuple[TeamStat, ...]
    user_stats: tuple[UserStat, ...]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class OrgStat:
    org_id: str
    name: str
    tasks: int
    users: int
    admins: int


@dataclass(frozen=True)
class PlatformReport:
    total_orgs: int
    total_admins: int
    total_users: int
    org_stats: tuple[OrgStat, ...]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class AttendanceRow:
    user_id: str
    name: str
    status: str
    total_hours: float


@dataclass(frozen=True)
class DashboardOverview:
    org_id: Optional[str]
    org_name: Optional[str]
    task_count: int
    team_count: int
    my_status: str

    def to_dict(self) -> dict:
        return asdict(self)
