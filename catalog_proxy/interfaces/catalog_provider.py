"""Abstract base class for movie/TV metadata providers.

One coroutine per upstream endpoint the proxy relies on.  Implementations
return the provider's JSON payload as a ``dict`` and raise
:class:`~catalog_proxy.utils.errors.UpstreamError` on any non-success
status or transport failure.  They never retry and never return partial
data.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ICatalogProvider(ABC):
    """Contract for third-party catalog metadata services."""

    @abstractmethod
    async def trending(self, media_type: str, time_window: str, page: int = 1) -> dict[str, Any]:
        """Trending titles for *media_type* (``movie``/``tv``/``all``) over *time_window*."""

    @abstractmethod
    async def search_multi(self, query: str, page: int = 1) -> dict[str, Any]:
        """Multi-kind search.  Results may include people as well as titles."""

    @abstractmethod
    async def discover(self, media_type: str, params: dict[str, str]) -> dict[str, Any]:
        """Filtered discovery.  *params* holds only the filters to send."""

    @abstractmethod
    async def title_details(self, media_type: str, title_id: int) -> dict[str, Any]:
        """Full details for one movie or tv show."""

    @abstractmethod
    async def season_details(self, tv_id: int, season_number: int) -> dict[str, Any]:
        """Episode list and details for one season of a tv show."""

    @abstractmethod
    async def genre_list(self, media_type: str) -> dict[str, Any]:
        """The provider's genre id/name table for *media_type*."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Short identifier used in logs and error messages (e.g. ``"tmdb"``)."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` when the provider is configured to make calls."""
