from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role, WorkStatus


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: plain data object, no store access. ``name`` is derived from the
    first/last name on every read so it cannot go stale after an edit.
    """

    id: str
    first_name: str
    last_name: str
    email: str
    password_hash: str
    role: Role
    org_ids: tuple[str, ...] = ()
    team_id: Optional[str] = None
    status: WorkStatus = WorkStatus.OFFICE
    must_change_password: bool = False
    version: int = 1

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def belongs_to(self, org_id: Optional[str]) -> bool:
        return org_id is not None and org_id in self.org_ids


def split_display_name(name: str) -> tuple[str, str]:
    """'Ada King Lovelace' -> ('Ada', 'King Lovelace')."""
    parts = (name or "").strip().split(" ")
    return parts[0], " ".join(parts[1:])
