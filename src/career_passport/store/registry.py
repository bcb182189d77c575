from __future__ import annotations

import logging
import secrets
import threading
import time
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

W = TypeVar("W")


class WorkspaceRegistry(Generic[W]):
    """Per-login workspaces keyed by an opaque token kept in the Flask session.

    With `idle_ttl` set (seconds), a workspace not looked up for that long is
    dropped the next time the registry is touched.
    """

    def __init__(
        self,
        factory: Callable[[], W],
        *,
        idle_ttl: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._factory = factory
        self._idle_ttl = idle_ttl
        self._clock = clock
        self._items: dict[str, W] = {}
        self._last_seen: dict[str, float] = {}
        self._lock = threading.Lock()

    def open(self) -> tuple[str, W]:
        token = secrets.token_urlsafe(24)
        workspace = self._factory()
        with self._lock:
            self._evict_idle_locked()
            self._items[token] = workspace
            self._last_seen[token] = self._clock()
        return token, workspace

    def get(self, token: Optional[str]) -> Optional[W]:
        if not token:
            return None
        with self._lock:
            self._evict_idle_locked()
            workspace = self._items.get(token)
            if workspace is not None:
                self._last_seen[token] = self._clock()
            return workspace

    def close(self, token: Optional[str]) -> Optional[W]:
        if not token:
            return None
        with self._lock:
            self._last_seen.pop(token, None)
            return self._items.pop(token, None)

    def evict_idle(self) -> int:
        with self._lock:
            return self._evict_idle_locked()

    def _evict_idle_locked(self) -> int:
        if not self._idle_ttl:
            return 0
        cutoff = self._clock() - self._idle_ttl
        expired = [t for t, seen in self._last_seen.items() if seen < cutoff]
        for t in expired:
            self._items.pop(t, None)
            self._last_seen.pop(t, None)
        if expired:
            logger.info("Dropped %d idle workspace(s)", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
