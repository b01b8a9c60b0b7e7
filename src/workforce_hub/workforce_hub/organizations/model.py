from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Organization:
    """Domain entity: a tenant boundary grouping users, teams, tasks and attendance.

    ``admin_ids`` is informational; authorization follows ``User.org_ids``.
    ``logs`` is append-only, free-text ``[SCOPE] message`` lines.
    """

    id: str
    name: str
    details: str = ""
    admin_ids: tuple[str, ...] = ()
    logs: tuple[str, ...] = ()
    version: int = 1
