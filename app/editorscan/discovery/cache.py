"""In-memory cache for Smart-tier discovery results.

Entries live only as long as the engine that owns the cache. Nothing is
written to disk.
"""

import logging
import os
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, replace

from editorscan.core.config import DEFAULT_CACHE_TTL
from editorscan.models.editor import EditorConfig

logger = logging.getLogger(__name__)

CacheKey = tuple[str, str, str]


@dataclass(frozen=True, slots=True)
class _Entry:
    editors: tuple[EditorConfig, ...]
    stored_at: float


def _copy(editor: EditorConfig) -> EditorConfig:
    return replace(editor, custom_args=list(editor.custom_args))


class DiscoveryCache:
    """Thread-safe TTL cache of discovery results.

    A hit is only served while every cached executable still exists;
    otherwise the entry is dropped and the caller rescans.

    Example:
        >>> cache = DiscoveryCache(ttl_seconds=300)
        >>> cache.put(key, editors)
        >>> cache.get(key)  # copies of editors, or None once stale
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL,
        *,
        clock: Callable[[], float] = time.monotonic,
        path_exists: Callable[[str], bool] = os.path.exists,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl_seconds: Entry lifetime. Zero disables caching.
            clock: Monotonic time source.
            path_exists: Predicate used to check cached executables.
        """
        self._ttl = ttl_seconds
        self._clock = clock
        self._path_exists = path_exists
        self._entries: dict[CacheKey, _Entry] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        """Return the entry lifetime in seconds."""
        return self._ttl

    def get(self, key: CacheKey) -> list[EditorConfig] | None:
        """Return copies of the cached editors, or None on a miss."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.stored_at >= self._ttl:
                logger.debug("Cache entry %s expired", key[0])
                del self._entries[key]
                return None
            if not all(self._path_exists(e.executable_path) for e in entry.editors):
                logger.debug("Cache entry %s references a removed executable", key[0])
                del self._entries[key]
                return None
            return [_copy(e) for e in entry.editors]

    def put(self, key: CacheKey, editors: list[EditorConfig]) -> None:
        """Store copies of editors under key."""
        if self._ttl <= 0:
            return
        with self._lock:
            self._entries[key] = _Entry(
                editors=tuple(_copy(e) for e in editors),
                stored_at=self._clock(),
            )

    def invalidate(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
