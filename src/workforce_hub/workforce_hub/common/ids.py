from __future__ import annotations

import threading
import time

_lock = threading.Lock()
_last_ms = 0


def new_entity_id(prefix: str) -> str:
    """Wall-clock derived id such as ``user-1718000000000``.

    Two calls within the same millisecond get distinct ids: the clock value is
    bumped past the last issued one.
    """
    global _last_ms
    with _lock:
        ms = int(time.time() * 1000)
        if ms <= _last_ms:
            ms = _last_ms + 1
        _last_ms = ms
    return f"{prefix}-{ms}"
