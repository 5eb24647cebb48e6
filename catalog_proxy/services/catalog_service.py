"""Catalog lookups over the upstream metadata provider.

Architecture role: **Facade**
-----------------------------
Route handlers call this service; it validates and normalizes inputs,
forwards to the injected :class:`ICatalogProvider`, and memoizes the one
composite query (top titles for a streaming provider) in the injected
:class:`ICacheProvider`.  Every other operation is a pass-through with no
side effects.

Top-by-provider
---------------
One logical lookup costs two upstream calls (discover movies and discover
tv, both filtered to a watch provider and region).  The two calls run
concurrently and fail together: if either raises, the sibling is cancelled,
nothing is cached, and the error propagates.  On success each list is tagged
with its media type, ranked by popularity and truncated, then merged,
re-ranked and truncated again.  The merged list is cached for the TTL and
served as-is on hits with no revalidation.

Concurrent misses on the same key each fetch and each write (last writer
wins) unless ``coalesce_inflight`` is on, in which case they share one
pending fetch.
"""

from __future__ import annotations

import math
from typing import Any

import structlog

from catalog_proxy.interfaces.cache_provider import ICacheProvider
from catalog_proxy.interfaces.catalog_provider import ICatalogProvider
from catalog_proxy.models.catalog import (
    DiscoverFilters,
    MediaType,
    TimeWindow,
    TrendingMediaType,
    normalize_region,
    provider_top_cache_key,
)
from catalog_proxy.utils.concurrency import InflightRegistry, gather_or_cancel
from catalog_proxy.utils.logging import get_logger

_SEARCHABLE_KINDS = frozenset({MediaType.MOVIE.value, MediaType.TV.value})

# TMDB's discover endpoints sort server-side too; we still re-sort locally
# because the merge needs a single ranking across both lists.
_POPULARITY_SORT = "popularity.desc"


def popularity_of(item: dict[str, Any]) -> float:
    """Return the item's popularity, treating absent or malformed values as 0."""
    raw = item.get("popularity")
    if isinstance(raw, bool):
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def rank_by_popularity(items: list[dict[str, Any]], limit: int) -> list[dict[str, Any]]:
    """Stable sort by descending popularity, then keep the first *limit*."""
    return sorted(items, key=popularity_of, reverse=True)[:limit]


class CatalogService:
    """Read-only catalog operations with a cached composite ranking.

    Parameters
    ----------
    provider:
        Upstream catalog adapter.
    cache:
        Cache used for top-by-provider results.  Owned by the caller, so
        tests can hand each service an isolated instance.
    top_limit:
        Size cap for each sub-list and for the merged result.
    default_region:
        Region used when a caller omits one.
    coalesce_inflight:
        Share one pending fetch between concurrent misses on the same key.
    """

    def __init__(
        self,
        provider: ICatalogProvider,
        cache: ICacheProvider,
        top_limit: int = 10,
        default_region: str = "US",
        coalesce_inflight: bool = False,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._top_limit = top_limit
        self._default_region = default_region
        self._inflight = InflightRegistry() if coalesce_inflight else None
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # -- Pass-through lookups ---------------------------------------------------

    async def trending(
        self,
        media_type: TrendingMediaType | str,
        time_window: TimeWindow | str,
        page: int = 1,
    ) -> dict[str, Any]:
        media = TrendingMediaType(media_type)
        window = TimeWindow(time_window)
        return await self._provider.trending(media.value, window.value, page=page)

    async def search_multi(self, query: str, page: int = 1) -> dict[str, Any]:
        """Search movies and tv; person and other kinds are dropped.

        An empty query returns an empty result set without calling upstream.
        """
        if not query:
            return {"results": [], "total_results": 0}

        data = await self._provider.search_multi(query, page=page)
        results = data.get("results") or []
        kept = [r for r in results if isinstance(r, dict) and r.get("media_type") in _SEARCHABLE_KINDS]
        if len(kept) != len(results):
            self._logger.debug("search_kinds_filtered", dropped=len(results) - len(kept))
        return {**data, "results": kept}

    async def discover(
        self,
        media_type: MediaType | str,
        filters: DiscoverFilters | None = None,
    ) -> dict[str, Any]:
        media = MediaType(media_type)
        params = (filters or DiscoverFilters()).to_params()
        return await self._provider.discover(media.value, params)

    async def title_details(self, media_type: MediaType | str, title_id: int) -> dict[str, Any]:
        return await self._provider.title_details(MediaType(media_type).value, title_id)

    async def season_details(self, tv_id: int, season_number: int) -> dict[str, Any]:
        return await self._provider.season_details(tv_id, season_number)

    async def genre_list(self, media_type: MediaType | str) -> dict[str, Any]:
        return await self._provider.genre_list(MediaType(media_type).value)

    # -- Cached composite ---------------------------------------------------------

    def resolve_region(self, region: str | None) -> str:
        """Normalized region, falling back to the configured default."""
        return normalize_region(region, self._default_region)

    async def top_by_provider(self, provider_id: int, region: str | None = None) -> list[dict[str, Any]]:
        """Top titles (movies and tv together) available on a streaming provider.

        Returns at most ``top_limit`` items sorted by descending popularity,
        each tagged with ``media_type``.  Served from cache while fresh.
        """
        resolved_region = self.resolve_region(region)
        key = provider_top_cache_key(provider_id, resolved_region)

        cached = await self._cache.get_entry(key)
        if cached is not None:
            return cached.value

        if self._inflight is not None:
            return await self._inflight.run(
                key, lambda: self._refresh_provider_top(key, provider_id, resolved_region)
            )
        return await self._refresh_provider_top(key, provider_id, resolved_region)

    async def _refresh_provider_top(
        self, key: str, provider_id: int, region: str
    ) -> list[dict[str, Any]]:
        movies, shows = await gather_or_cancel(
            self._discover_for_provider(MediaType.MOVIE, provider_id, region),
            self._discover_for_provider(MediaType.TV, provider_id, region),
        )
        merged = rank_by_popularity(movies + shows, self._top_limit)

        entry = await self._cache.set(key, merged)
        self._logger.info(
            "provider_top_built",
            key=key,
            movies=len(movies),
            shows=len(shows),
            results=len(merged),
            stored_at=entry.stored_at,
        )
        return merged

    async def _discover_for_provider(
        self, media_type: MediaType, provider_id: int, region: str
    ) -> list[dict[str, Any]]:
        filters = DiscoverFilters(
            with_watch_providers=str(provider_id),
            watch_region=region,
            sort_by=_POPULARITY_SORT,
            page=1,
        )
        data = await self._provider.discover(media_type.value, filters.to_params())
        # Provider-filtered discovery omits media_type, so tag before merging.
        tagged = [
            {**item, "media_type": media_type.value}
            for item in (data.get("results") or [])
            if isinstance(item, dict)
        ]
        return rank_by_popularity(tagged, self._top_limit)
