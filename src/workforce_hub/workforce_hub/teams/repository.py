from __future__ import annotations

from typing import Callable, Optional, Protocol

from .model import Project, Team


class TeamRepository(Protocol):
    def get_by_id(self, entity_id: str) -> Optional[Team]:
        raise NotImplementedError

    def list_all(self) -> list[Team]:
        raise NotImplementedError

    def list_by(self, predicate: Callable[[Team], bool]) -> list[Team]:
        raise NotImplementedError

    def upsert(self, entity: Team) -> Team:
        raise NotImplementedError

    def remove(self, entity_id: str) -> bool:
        raise NotImplementedError


class ProjectRepository(Protocol):
    def get_by_id(self, entity_id: str) -> Optional[Project]:
        raise NotImplementedError

    def list_by(self, predicate: Callable[[Project], bool]) -> list[Project]:
        raise NotImplementedError
