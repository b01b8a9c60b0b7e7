from __future__ import annotations

from dataclasses import dataclass, field

from ..attendance.model import AttendanceRecord
from ..organizations.model import Organization
from ..tasks.model import Task
from ..teams.model import Project, Team
from ..users.model import User
from .memory import InMemoryRepository


@dataclass
class EntityStore:
    """All collections of the running process. No behaviour beyond holding data."""

    organizations: InMemoryRepository[Organization] = field(default_factory=InMemoryRepository)
    users: InMemoryRepository[User] = field(default_factory=InMemoryRepository)
    teams: InMemoryRepository[Team] = field(default_factory=InMemoryRepository)
    projects: InMemoryRepository[Project] = field(default_factory=InMemoryRepository)
    tasks: InMemoryRepository[Task] = field(default_factory=InMemoryRepository)
    attendance: InMemoryRepository[AttendanceRecord] = field(default_factory=InMemoryRepository)
