"""FastAPI routes for the catalog proxy.

Endpoint                                           Description
─────────────────────────────────────────────────────────────────────────────
/api/catalog/trending/{media_type}/{time_window}   Trending titles (pass-through)
/api/catalog/search/multi                          Movie + tv search, people dropped
/api/catalog/discover/{media_type}                 Filtered discovery (pass-through)
/api/catalog/provider/{provider_id}/top            Top 10 on a provider (cached)
/api/catalog/movie/{id}                            Movie details
/api/catalog/tv/{id}                               TV show details
/api/catalog/tv/{id}/season/{season_number}        Season details
/api/catalog/genre/{media_type}/list               Genre table
/api/health                                        Health + provider status

Services are resolved from ``app.state`` (populated at startup in
main.py's ``_build_all``) through ``Depends`` with the ``Annotated`` pattern.
Errors are not handled here; they propagate to the middleware, which turns
them into the uniform ``{"error": ...}`` body.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Query, Request

from catalog_proxy import __version__
from catalog_proxy.api.schemas import ErrorResponse, HealthResponse, ProviderTopResponse
from catalog_proxy.interfaces.cache_provider import ICacheProvider
from catalog_proxy.models.catalog import DiscoverFilters, MediaType, TimeWindow, TrendingMediaType
from catalog_proxy.services.catalog_service import CatalogService


router = APIRouter(prefix="/api/catalog", responses={500: {"model": ErrorResponse}})
health_router = APIRouter(prefix="/api")


# ---------------------------------------------------------------------------
# Dependency injection helpers: resolve singletons from app.state
# ---------------------------------------------------------------------------


def _get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


def _get_cache(request: Request) -> ICacheProvider:
    return request.app.state.cache


CatalogDep = Annotated[CatalogService, Depends(_get_catalog_service)]
CacheDep = Annotated[ICacheProvider, Depends(_get_cache)]

PageQuery = Annotated[int, Query(ge=1, description="1-based result page")]
IdPath = Annotated[int, Path(ge=1)]


# ---------------------------------------------------------------------------
# Catalog endpoints
# ---------------------------------------------------------------------------


@router.get("/trending/{media_type}/{time_window}", summary="Trending titles")
async def trending(
    media_type: TrendingMediaType,
    time_window: TimeWindow,
    catalog: CatalogDep,
    page: PageQuery = 1,
) -> dict[str, Any]:
    return await catalog.trending(media_type, time_window, page=page)


@router.get("/search/multi", summary="Search movies and tv shows")
async def search_multi(
    catalog: CatalogDep,
    query: str = "",
    page: PageQuery = 1,
) -> dict[str, Any]:
    return await catalog.search_multi(query, page=page)


@router.get("/discover/{media_type}", summary="Discover titles with optional filters")
async def discover(
    media_type: MediaType,
    catalog: CatalogDep,
    with_genres: str | None = None,
    sort_by: str | None = None,
    page: Annotated[int | None, Query(ge=1)] = None,
    with_watch_providers: str | None = None,
    watch_region: str | None = None,
) -> dict[str, Any]:
    filters = DiscoverFilters(
        with_genres=with_genres,
        sort_by=sort_by,
        page=page,
        with_watch_providers=with_watch_providers,
        watch_region=watch_region,
    )
    return await catalog.discover(media_type, filters)


@router.get(
    "/provider/{provider_id}/top",
    response_model=ProviderTopResponse,
    summary="Top titles on a streaming provider (cached)",
)
async def provider_top(
    provider_id: IdPath,
    catalog: CatalogDep,
    region: str | None = None,
) -> ProviderTopResponse:
    resolved = catalog.resolve_region(region)
    results = await catalog.top_by_provider(provider_id, resolved)
    return ProviderTopResponse(provider_id=provider_id, region=resolved, results=results)


@router.get("/movie/{title_id}", summary="Movie details")
async def movie_details(title_id: IdPath, catalog: CatalogDep) -> dict[str, Any]:
    return await catalog.title_details(MediaType.MOVIE, title_id)


@router.get("/tv/{title_id}", summary="TV show details")
async def tv_details(title_id: IdPath, catalog: CatalogDep) -> dict[str, Any]:
    return await catalog.title_details(MediaType.TV, title_id)


@router.get("/tv/{title_id}/season/{season_number}", summary="Season details")
async def season_details(
    title_id: IdPath,
    season_number: Annotated[int, Path(ge=0)],
    catalog: CatalogDep,
) -> dict[str, Any]:
    return await catalog.season_details(title_id, season_number)


@router.get("/genre/{media_type}/list", summary="Genre list")
async def genre_list(media_type: MediaType, catalog: CatalogDep) -> dict[str, Any]:
    return await catalog.genre_list(media_type)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@health_router.get("/health", response_model=HealthResponse, summary="Application health check")
async def health_check(request: Request, cache: CacheDep) -> HealthResponse:
    """Return version, upstream availability, and live cache entry count."""
    providers = dict(getattr(request.app.state, "provider_registry", {}))
    return HealthResponse(
        status="ok" if all(providers.values()) else "degraded",
        version=__version__,
        providers=providers,
        cache_entries=cache.size(),
    )
