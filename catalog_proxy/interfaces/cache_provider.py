"""Abstract base class for cache service providers.

Defines the contract for the key-value cache that memoizes composite
catalog queries.  Implementations may use an in-process map, Redis, or any
other store; the service layer only sees this interface, so the backend can
be swapped without touching business logic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from catalog_proxy.models.catalog import CacheEntry


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    All operations are async to allow for network-backed stores (e.g. Redis)
    without blocking the event loop.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Retrieve the value stored under *key*.

        Returns
        -------
        Any or None
            The cached value if present and fresh; ``None`` otherwise.
        """

    @abstractmethod
    async def get_entry(self, key: str) -> CacheEntry | None:
        """Return the full :class:`CacheEntry` for *key*, including its
        ``stored_at`` timestamp, or ``None`` if missing or expired.
        """

    @abstractmethod
    async def set(self, key: str, value: Any) -> CacheEntry:
        """Store *value* under *key*, replacing any existing entry.

        The write is an unconditional overwrite: the last writer wins.

        Returns
        -------
        CacheEntry
            The entry that was stored, stamped with the current time.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the entry stored under *key*.  No-op if absent."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present in the cache and not expired."""

    @abstractmethod
    async def clear(self) -> None:
        """Drop every entry."""

    @abstractmethod
    def size(self) -> int:
        """Number of entries currently held (expired ones may linger until accessed)."""
