from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    org_id: str
    lead_id: Optional[str] = None
    version: int = 1


@dataclass(frozen=True)
class Project:
    """Read-only grouping referenced by ``Task.project_id``."""

    id: str
    name: str
    description: str
    team_id: str
    org_id: str
    deadline: str
