from __future__ import annotations

from typing import Callable, Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Repository interface for User."""

    def get_by_id(self, entity_id: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> list[User]:
        raise NotImplementedError

    def list_by(self, predicate: Callable[[User], bool]) -> list[User]:
        raise NotImplementedError

    def upsert(self, entity: User) -> User:
        raise NotImplementedError

    def remove(self, entity_id: str) -> bool:
        raise NotImplementedError
