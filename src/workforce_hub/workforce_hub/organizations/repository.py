from __future__ import annotations

from typing import Callable, Optional, Protocol

from .model import Organization


class OrganizationRepository(Protocol):
    """Repository interface for Organization.

    Services depend on this protocol, not on the in-memory store.
    """

    def get_by_id(self, entity_id: str) -> Optional[Organization]:
        raise NotImplementedError

    def list_all(self) -> list[Organization]:
        raise NotImplementedError

    def list_by(self, predicate: Callable[[Organization], bool]) -> list[Organization]:
        raise NotImplementedError

    def upsert(self, entity: Organization) -> Organization:
        raise NotImplementedError

    def remove(self, entity_id: str) -> bool:
        raise NotImplementedError
