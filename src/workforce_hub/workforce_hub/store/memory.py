from __future__ import annotations

import threading
from typing import Callable, Generic, Optional, Protocol, Sequence, TypeVar


class HasId(Protocol):
    id: str


T = TypeVar("T", bound=HasId)


class InMemoryRepository(Generic[T]):
    """Insertion-ordered, process-local collection of frozen entities.

    Writers are serialized with a re-entrant lock; readers get a snapshot list.
    Updating an existing id keeps its original position.
    """

    def __init__(self, items: Sequence[T] = ()):
        self._lock = threading.RLock()
        self._items: dict[str, T] = {}
        for item in items:
            self._items[item.id] = item

    def get_by_id(self, entity_id: str) -> Optional[T]:
        with self._lock:
            return self._items.get(entity_id)

    def list_all(self) -> list[T]:
        with self._lock:
            return list(self._items.values())

    def list_by(self, predicate: Callable[[T], bool]) -> list[T]:
        with self._lock:
            return [item for item in self._items.values() if predicate(item)]

    def upsert(self, entity: T) -> T:
        with self._lock:
            self._items[entity.id] = entity
            return entity

    def remove(self, entity_id: str) -> bool:
        with self._lock:
            return self._items.pop(entity_id, None) is not None

    def prepend(self, entity: T) -> T:
        """Insert ahead of existing items (newest-first collections)."""
        with self._lock:
            items = {entity.id: entity}
            items.update((k, v) for k, v in self._items.items() if k != entity.id)
            self._items = items
            return entity

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
