from __future__ import annotations

from typing import Callable, Optional, Protocol

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Append-only: there is no update or remove."""

    def get_by_id(self, entity_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self) -> list[AttendanceRecord]:
        raise NotImplementedError

    def list_by(self, predicate: Callable[[AttendanceRecord], bool]) -> list[AttendanceRecord]:
        raise NotImplementedError

    def prepend(self, entity: AttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError
