"""Catalog request and cache models.

Defines the enums accepted by the HTTP surface, the optional discover
filters, and the cache entry wrapper.  All models are frozen: a cache entry
is replaced wholesale on re-fetch, never updated in place.

Upstream payloads themselves stay as plain ``dict`` objects.  The proxy
forwards them mostly untouched, so modelling every TMDB field would only
drop data the clients rely on.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MediaType(str, Enum):  # noqa: UP042  (StrEnum needs 3.11)
    """Catalog kinds the proxy serves.  Also the tag put on composite results."""

    MOVIE = "movie"
    TV = "tv"


class TrendingMediaType(str, Enum):  # noqa: UP042
    """Trending accepts an extra ``all`` bucket that mixes movies, tv and people."""

    MOVIE = "movie"
    TV = "tv"
    ALL = "all"


class TimeWindow(str, Enum):  # noqa: UP042
    DAY = "day"
    WEEK = "week"


class DiscoverFilters(BaseModel):
    """Optional filters for ``/discover/{media_type}``.

    Absent filters are omitted from the upstream call entirely rather than
    sent as empty strings.
    """

    model_config = ConfigDict(frozen=True)

    with_genres: str | None = None
    sort_by: str | None = None
    page: int | None = Field(default=None, ge=1)
    with_watch_providers: str | None = None
    watch_region: str | None = None

    def to_params(self) -> dict[str, str]:
        """Return only the filters that carry a value, stringified for the query."""
        params: dict[str, str] = {}
        for name, value in self.model_dump().items():
            if value is None:
                continue
            text = str(value).strip()
            if text:
                params[name] = text
        return params


class CacheEntry(BaseModel):
    """A memoized payload and the clock reading at which it was stored.

    The entry is fresh strictly while ``now - stored_at < ttl``.
    """

    model_config = ConfigDict(frozen=True)

    key: str
    value: Any
    stored_at: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        return now - self.stored_at < ttl


def provider_top_cache_key(provider_id: int, region: str) -> str:
    """Build the cache key for the top-by-provider composite query."""
    return f"providerTop:{provider_id}:{region}"


def normalize_region(region: str | None, default: str = "US") -> str:
    """Upper-case and strip an ISO 3166-1 region; blank falls back to *default*."""
    cleaned = (region or "").strip().upper()
    return cleaned or default.strip().upper()
