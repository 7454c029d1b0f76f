"""View Cache — in-process cache of rendered page payloads, invalidated by path.

Invariants:
    - Entries are grouped by path; one path holds one payload per query key
    - invalidate(path) drops every query variant of that path at once
    - Never shared across processes

Design Decisions:
    - Module-level singleton (view_cache): single-process uvicorn, same trade-off
      as any in-memory state (lost on restart, not shared between workers)
    - Payloads are stored as-is; callers must not mutate what get() returns
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryViewCache:
    """Path-keyed payload cache."""

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, Any]] = {}

    def get(self, path: str, key: str = "") -> Any | None:
        return self._entries.get(path, {}).get(key)

    def put(self, path: str, key: str, payload: Any) -> None:
        self._entries.setdefault(path, {})[key] = payload

    def invalidate(self, path: str) -> None:
        dropped = self._entries.pop(path, None)
        logger.info(
            f"Invalidated cached view ({len(dropped or {})} entries)",
            extra={"path": path},
        )

    def clear(self) -> None:
        self._entries.clear()


view_cache = InMemoryViewCache()


def get_view_cache() -> InMemoryViewCache:
    """FastAPI dependency for the process-wide view cache."""
    return view_cache
