"""Catalog proxy models: re-exports all public model classes.

    - catalog.py  request enums, discover filters, cache entries
    - user.py     record names for the per-user key-value collaborator
"""

from __future__ import annotations

from catalog_proxy.models.catalog import (
    CacheEntry,
    DiscoverFilters,
    MediaType,
    TimeWindow,
    TrendingMediaType,
    normalize_region,
    provider_top_cache_key,
)
from catalog_proxy.models.user import UserField

__all__ = [
    "CacheEntry",
    "DiscoverFilters",
    "MediaType",
    "TimeWindow",
    "TrendingMediaType",
    "UserField",
    "normalize_region",
    "provider_top_cache_key",
]
