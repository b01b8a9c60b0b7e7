from __future__ import annotations

from dataclasses import replace
from typing import Optional, TypeVar

from ..core.exceptions import ConflictError

T = TypeVar("T")


def check_version(entity, expected_version: Optional[int]) -> None:
    """Optimistic concurrency: reject edits made against an older copy."""
    if expected_version is None:
        return
    if int(expected_version) != entity.version:
        raise ConflictError(
            f"{type(entity).__name__} {entity.id} was modified by someone else "
            f"(expected version {expected_version}, current {entity.version})"
        )


def bump(entity: T, **changes) -> T:
    return replace(entity, version=entity.version + 1, **changes)
