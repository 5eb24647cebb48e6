"""Shared pytest fixtures for the catalog proxy test suite."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from catalog_proxy.config.settings import Settings
from catalog_proxy.interfaces.catalog_provider import ICatalogProvider
from catalog_proxy.providers.cache.memory_cache import MemoryCacheProvider
from catalog_proxy.services.catalog_service import CatalogService


class FakeClock:
    """Manually advanced clock for driving cache expiry."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_settings(**overrides: Any) -> Settings:
    """Build a Settings instance with safe defaults and optional overrides."""
    defaults: dict[str, Any] = {
        "tmdb_api_key": "test-key",
        "tmdb_base_url": "https://tmdb.test/3",
        "tmdb_timeout_seconds": 5.0,
        "provider_top_ttl_seconds": 600.0,
        "provider_top_limit": 10,
        "provider_top_coalesce": False,
        "cache_max_size": 64,
        "default_region": "US",
        "app_env": "test",
        "cors_origins": "*",
    }
    defaults.update(overrides)
    return Settings(**defaults)


def discover_page(prefix: str, popularities: list[Any]) -> dict[str, Any]:
    """A TMDB-shaped discover page; ids are ``{prefix}-{index}``."""
    results = []
    for idx, pop in enumerate(popularities):
        item: dict[str, Any] = {"id": f"{prefix}-{idx}", "title": f"{prefix} {idx}"}
        if pop is not ...:
            item["popularity"] = pop
        results.append(item)
    return {"page": 1, "results": results, "total_results": len(results), "total_pages": 1}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> MemoryCacheProvider:
    return MemoryCacheProvider(max_size=64, ttl=600.0, clock=clock)


@pytest.fixture
def mock_catalog_provider() -> MagicMock:
    """Mock ICatalogProvider with small TMDB-like payloads.

    ``discover`` answers by media type so the composite query receives a
    movie page and a tv page.  Override per test via ``side_effect``.
    """
    mock = MagicMock(spec=ICatalogProvider)
    mock.get_provider_name.return_value = "mock-tmdb"
    mock.is_available.return_value = True

    movie_page = discover_page("movie", [50.0, 90.0, 10.0])
    tv_page = discover_page("tv", [70.0, 5.0])

    async def _discover(media_type: str, params: dict[str, str]) -> dict[str, Any]:
        return movie_page if media_type == "movie" else tv_page

    mock.discover = AsyncMock(side_effect=_discover)
    mock.trending = AsyncMock(return_value={"page": 1, "results": [{"id": 1, "media_type": "movie"}]})
    mock.search_multi = AsyncMock(
        return_value={
            "page": 1,
            "results": [
                {"id": 1, "media_type": "movie", "title": "Alien"},
                {"id": 2, "media_type": "person", "name": "Sigourney Weaver"},
                {"id": 3, "media_type": "tv", "name": "Alien: Earth"},
            ],
            "total_results": 3,
        }
    )
    mock.title_details = AsyncMock(return_value={"id": 603, "title": "The Matrix"})
    mock.season_details = AsyncMock(return_value={"season_number": 1, "episodes": []})
    mock.genre_list = AsyncMock(return_value={"genres": [{"id": 18, "name": "Drama"}]})
    return mock


@pytest.fixture
def catalog_service(mock_catalog_provider: MagicMock, cache: MemoryCacheProvider) -> CatalogService:
    return CatalogService(provider=mock_catalog_provider, cache=cache, top_limit=10)
