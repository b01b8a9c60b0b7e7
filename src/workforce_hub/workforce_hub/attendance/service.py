from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc, to_iso
from ..common.ids import new_entity_id
from ..common.validators import require_enum
from ..common.versioning import bump
from ..core.constants import DEFAULT_HOURS_WORKED
from ..core.enums import WorkStatus
from ..core.exceptions import NotFoundError
from ..users.model import User
from ..users.repository import UserRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

# LEAVE is deliberately absent: going on leave changes the status but writes no record.
RECORDED_STATUSES = (WorkStatus.OFFICE, WorkStatus.WFH)


@dataclass(frozen=True)
class StatusChange:
    user: User
    record: Optional[AttendanceRecord]


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        hours_per_record: float = DEFAULT_HOURS_WORKED,
        lock: threading.RLock | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._hours = hours_per_record
        self._lock = lock or threading.RLock()

    def update_status(
        self,
        user_id: str,
        status: WorkStatus | str,
        *,
        org_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> StatusChange:
        """Set a user's own work status.

        OFFICE and WFH append a record to ``org_id`` (when the user belongs to
        it) or to the user's first organization. Users without any
        organization get the status change only.
        """
        status = require_enum(status, WorkStatus, "Status")
        now = now or now_utc()

        with self._lock:
            user = self._users.get_by_id(user_id)
            if not user:
                raise NotFoundError(f"User {user_id} not found")
            user = bump(user, status=status)
            self._users.upsert(user)

            record = None
            target_org = org_id if user.belongs_to(org_id) else (user.org_ids[0] if user.org_ids else None)
            if status in RECORDED_STATUSES and target_org:
                record = AttendanceRecord(
                    id=new_entity_id("att"),
                    user_id=user.id,
                    org_id=target_org,
                    date=now.date().isoformat(),
                    clock_in=to_iso(now),
                    status=status,
                    hours_worked=self._hours,
                )
                self._attendance.prepend(record)

        logger.info("User %s status -> %s (record=%s)", user.id, status.value, record.id if record else None)
        return StatusChange(user=user, record=record)

    def get_history(self, user_id: str, *, limit: int = 15) -> list[AttendanceRecord]:
        rows = self._attendance.list_by(lambda r: r.user_id == user_id)
        rows.sort(key=lambda r: r.clock_in, reverse=True)
        return rows[:limit]
