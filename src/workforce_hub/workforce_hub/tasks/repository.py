from __future__ import annotations

from typing import Callable, Optional, Protocol

from .model import Task


class TaskRepository(Protocol):
    def get_by_id(self, entity_id: str) -> Optional[Task]:
        raise NotImplementedError

    def list_all(self) -> list[Task]:
        raise NotImplementedError

    def list_by(self, predicate: Callable[[Task], bool]) -> list[Task]:
        raise NotImplementedError

    def upsert(self, entity: Task) -> Task:
        raise NotImplementedError

    def remove(self, entity_id: str) -> bool:
        raise NotImplementedError
