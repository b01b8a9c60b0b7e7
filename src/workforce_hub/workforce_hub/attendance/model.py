from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import WorkStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one status check-in. Records are never edited."""

    id: str
    user_id: str
    org_id: str
    date: str
    clock_in: str
    status: WorkStatus
    hours_worked: float
    clock_out: Optional[str] = None
