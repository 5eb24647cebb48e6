"""In-memory cache provider using cachetools.TTLCache.

Fast, process-local cache suitable for single-process deployments.  Entries
are lost on restart.  Can be swapped for Redis or another backend via the
ICacheProvider interface.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable

import structlog
from cachetools import TTLCache

from catalog_proxy.interfaces.cache_provider import ICacheProvider
from catalog_proxy.models.catalog import CacheEntry

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """In-memory TTL cache backed by ``cachetools.TTLCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    ttl:
        Time-to-live in seconds.  An entry is served strictly while
        ``clock() - stored_at < ttl``.
    clock:
        Zero-argument callable returning the current time in seconds.
        Shared with the underlying ``TTLCache`` so tests can drive expiry
        deterministically.
    """

    def __init__(
        self,
        max_size: int = 1024,
        ttl: float = 600.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._cache: TTLCache[str, CacheEntry] = TTLCache(maxsize=max_size, ttl=ttl, timer=clock)
        self._lock = threading.Lock()

    @property
    def ttl(self) -> float:
        return self._ttl

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Retrieve the cached value for *key*, or ``None`` if missing/expired."""
        entry = await self.get_entry(key)
        return entry.value if entry is not None else None

    async def get_entry(self, key: str) -> CacheEntry | None:
        """Return the fresh entry for *key*, dropping it if it has gone stale."""
        with self._lock:
            entry = self._cache.get(key)
            if entry is not None and not entry.is_fresh(self._clock(), self._ttl):
                self._cache.pop(key, None)
                entry = None

        if entry is not None:
            logger.debug("cache_hit", key=key, age=round(self._clock() - entry.stored_at, 3))
        else:
            logger.debug("cache_miss", key=key)
        return entry

    async def set(self, key: str, value: Any) -> CacheEntry:
        """Store *value* under *key*, replacing any previous entry wholesale."""
        with self._lock:
            entry = CacheEntry(key=key, value=value, stored_at=self._clock())
            self._cache[key] = entry
        logger.debug("cache_set", key=key, stored_at=entry.stored_at)
        return entry

    async def delete(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        with self._lock:
            self._cache.pop(key, None)
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and not expired."""
        return await self.get_entry(key) is not None

    async def clear(self) -> None:
        with self._lock:
            self._cache.clear()
        logger.debug("cache_clear")

    def size(self) -> int:
        with self._lock:
            self._cache.expire()
            return len(self._cache)
