"""Abstract base class for the per-user key-value store.

The client apps keep four JSON records per user (profile, watchlist,
episode progress, friends).  The contract is deliberately tiny: read a blob
by (user, field), write a blob by (user, field).  There is no caching or
concurrency contract beyond last-write-wins per key.

The catalog proxy does not depend on this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from catalog_proxy.models.user import UserField


class IUserStore(ABC):
    """Contract for per-user namespaced JSON blob storage."""

    @abstractmethod
    async def read(self, user_key: str, field: UserField) -> Any | None:
        """Return the decoded blob for (*user_key*, *field*), or ``None`` if absent."""

    @abstractmethod
    async def write(self, user_key: str, field: UserField, blob: Any) -> None:
        """Store *blob* (any JSON-serialisable value), replacing the previous one.

        Raises
        ------
        TypeError
            If *blob* cannot be serialised to JSON.
        """
