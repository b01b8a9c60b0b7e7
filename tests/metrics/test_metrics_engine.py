from __future__ import annotations

import pytest

from src.workforce_hub.workforce_hub.attendance.model import AttendanceRecord
from src.workforce_hub.workforce_hub.core.enums import Role, TaskStatus, WorkStatus
from src.workforce_hub.workforce_hub.core.exceptions import AuthorizationError
from src.workforce_hub.workforce_hub.metrics.calculator.completion_rate_calculator import CompletionRateCalculator
from src.workforce_hub.workforce_hub.metrics.service import build_executive_report, build_platform_report
from src.workforce_hub.workforce_hub.organizations.model import Organization
from src.workforce_hub.workforce_hub.tasks.model import Task
from src.workforce_hub.workforce_hub.teams.model import Team
from src.workforce_hub.workforce_hub.users.model import User

OZONE = Organization(id="org-2", name="Ozone")


def _user(user_id: str, org_id: str = "org-2", role: Role = Role.MEMBER) -> User:
    return User(
        id=user_id,
        first_name=user_id.title(),
        last_name="",
        email=f"{user_id}@example.com",
        password_hash="!",
        role=role,
        org_ids=(org_id,),
    )


def _record(record_id: str, status: WorkStatus, hours: float, org_id: str = "org-2") -> AttendanceRecord:
    return AttendanceRecord(
        id=record_id,
        user_id="u1",
        org_id=org_id,
        date="2024-06-10",
        clock_in="2024-06-10T09:00:00Z",
        status=status,
        hours_worked=hours,
    )


def _task(task_id: str, done: bool, *, team_id: str | None = None, assignees=(), org_id: str = "org-2") -> Task:
    return Task(
        id=task_id,
        title=task_id,
        org_id=org_id,
        team_id=team_id,
        assigned_to_ids=tuple(assignees),
        status=TaskStatus.DONE if done else TaskStatus.TODO,
    )


def test_ozone_hours_by_status():
    records = [
        _record("a1", WorkStatus.OFFICE, 8),
        _record("a2", WorkStatus.WFH, 7.5),
        _record("a3", WorkStatus.OFFICE, 6, org_id="org-1"),
    ]

    report = build_executive_report(OZONE, [], [], [], records, calculator=CompletionRateCalculator())

    assert report.office_hours == 8
    assert report.wfh_hours == 7.5
    assert report.leave_nodes == 0


def test_leave_records_are_counted():
    records = [_record("a1", WorkStatus.LEAVE, 0), _record("a2", WorkStatus.LEAVE, 0)]

    report = build_executive_report(OZONE, [], [], [], records, calculator=CompletionRateCalculator())

    assert report.leave_nodes == 2


@pytest.mark.parametrize(
    "completed, total, expected",
    [(0, 0, 0), (0, 3, 0), (1, 3, 33), (2, 3, 67), (1, 2, 50), (1, 8, 13), (3, 3, 100)],
)
def test_completion_rate(completed, total, expected):
    assert CompletionRateCalculator().efficiency(completed, total) == expected


def test_team_without_tasks_has_zero_efficiency():
    teams = [Team(id="t1", name="Idle", org_id="org-2"), Team(id="t2", name="Busy", org_id="org-2")]
    tasks = [_task("k1", True, team_id="t2"), _task("k2", False, team_id="t2"), _task("k3", True, team_id="t2")]

    report = build_executive_report(OZONE, [], teams, tasks, [], calculator=CompletionRateCalculator())

    stats = {s.team_id: s for s in report.team_stats}
    assert stats["t1"].efficiency == 0
    assert stats["t1"].total == 0
    assert stats["t2"].efficiency == 67
    assert (stats["t2"].completed, stats["t2"].total) == (2, 3)


def test_top_users_capped_at_five_and_sorted():
    users = [_user(f"u{i}") for i in range(7)] + [_user("outsider", org_id="org-1")]
    tasks = []
    for i in range(7):
        tasks += [_task(f"u{i}-k{j}", True, assignees=[f"u{i}"]) for j in range(i)]
    tasks.append(_task("foreign", True, assignees=["u0"], org_id="org-1"))

    report = build_executive_report(OZONE, users, [], tasks, [], calculator=CompletionRateCalculator())

    completed = [s.completed for s in report.user_stats]
    assert len(report.user_stats) == 5
    assert completed == sorted(completed, reverse=True)
    assert [s.user_id for s in report.user_stats] == ["u6", "u5", "u4", "u3", "u2"]


def test_platform_report_counts():
    orgs = [Organization(id="org-1", name="A"), Organization(id="org-2", name="B")]
    users = [_user("a1", "org-1", Role.ADMIN), _user("m1", "org-1"), _user("m2", "org-2")]
    tasks = [_task("k1", False, org_id="org-1"), _task("k2", True, org_id="org-1")]

    report = build_platform_report(orgs, users, tasks)

    assert (report.total_orgs, report.total_admins, report.total_users) == (2, 1, 3)
    by_org = {s.org_id: s for s in report.org_stats}
    assert (by_org["org-1"].tasks, by_org["org-1"].users, by_org["org-1"].admins) == (2, 2, 1)
    assert (by_org["org-2"].tasks, by_org["org-2"].users, by_org["org-2"].admins) == (0, 1, 0)


def test_executive_report_for_seeded_forge(container, as_user):
    report = container.metrics_service.executive_report(as_user("admin-1"))

    assert report.org_name == "ForgeAcademy"
    assert report.office_hours == 14
    assert report.wfh_hours == 0
    assert report.leave_nodes == 1
    assert [(s.name, s.efficiency) for s in report.team_stats] == [("Forge Dev", 50)]
    assert report.user_stats[0].user_id == "user-3"


def test_executive_report_reflects_new_status_change(container, as_user):
    container.attendance_service.update_status("user-4", "Office", org_id="org-2")

    report = container.metrics_service.executive_report(as_user("admin-2"))

    assert report.office_hours == 8
    assert report.wfh_hours == 7.5


def test_members_and_other_orgs_are_refused(container, as_user):
    with pytest.raises(AuthorizationError):
        container.metrics_service.executive_report(as_user("user-3"))
    with pytest.raises(AuthorizationError):
        container.metrics_service.executive_report(as_user("admin-2"), "org-1")


def test_platform_report_is_super_user_only(container, as_user):
    report = container.metrics_service.platform_report(as_user("super-1"))

    assert report.total_orgs == 2
    assert report.total_admins == 2
    with pytest.raises(AuthorizationError):
        container.metrics_service.platform_report(as_user("admin-1"))


def test_attendance_overview_sums_hours(container, as_user):
    rows = {r.user_id: r for r in container.metrics_service.attendance_overview(as_user("admin-1"))}

    assert set(rows) == {"admin-1", "user-3", "user-5"}
    assert rows["user-3"].total_hours == 8
    assert rows["user-5"].total_hours == 6
    assert rows["user-3"].status == "Office"
