"""Catalog proxy FastAPI application entry point.

Wires together the upstream provider, the cache, and the catalog service via
dependency injection, configures structured logging, and mounts the routes.
Every component is owned by the application instance (built in the lifespan,
released on shutdown), so separate apps never share a cache.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from catalog_proxy import __version__
from catalog_proxy.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    register_exception_handlers,
)
from catalog_proxy.api.routes import health_router, router as catalog_router
from catalog_proxy.config.loader import load_config
from catalog_proxy.config.settings import Settings
from catalog_proxy.providers.cache.memory_cache import MemoryCacheProvider
from catalog_proxy.providers.catalog.tmdb_provider import TMDBCatalogProvider
from catalog_proxy.providers.user_store.sqlite_user_store import SQLiteUserStore
from catalog_proxy.services.catalog_service import CatalogService
from catalog_proxy.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# DI assembly
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    http_client = httpx.AsyncClient(timeout=app_settings.tmdb_timeout_seconds)

    catalog_provider = TMDBCatalogProvider(settings=app_settings, http_client=http_client)
    if not catalog_provider.is_available():
        _logger.warning(
            "tmdb_api_key_missing",
            msg="TMDB_API_KEY is not set; every catalog request will fail until it is.",
        )

    cache = MemoryCacheProvider(
        max_size=app_settings.cache_max_size,
        ttl=app_settings.provider_top_ttl_seconds,
    )

    catalog_service = CatalogService(
        provider=catalog_provider,
        cache=cache,
        top_limit=app_settings.provider_top_limit,
        default_region=app_settings.default_region,
        coalesce_inflight=app_settings.provider_top_coalesce,
    )

    # Kept for the client apps' per-user records; no catalog route reads it.
    user_store = SQLiteUserStore(db_path=app_settings.user_store_db_path)

    provider_registry: dict[str, bool] = {
        catalog_provider.get_provider_name(): catalog_provider.is_available(),
        "cache": True,
    }

    return {
        "settings": app_settings,
        "http_client": http_client,
        "cache": cache,
        "catalog_provider": catalog_provider,
        "catalog_service": catalog_service,
        "user_store": user_store,
        "provider_registry": provider_registry,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


def _make_lifespan(app_settings: Settings):  # noqa: ANN202
    @asynccontextmanager
    async def _lifespan(application: FastAPI):  # noqa: ANN202
        components = _build_all(app_settings)
        for key, value in components.items():
            setattr(application.state, key, value)

        # Create the user blob table if needed
        await components["user_store"].initialize()

        _logger.info(
            "app_startup",
            version=__version__,
            environment=app_settings.app_env,
            upstream=components["catalog_provider"].get_provider_name(),
            cache_backend=config.get("cache", {}).get("backend", "memory"),
            provider_top_ttl_seconds=app_settings.provider_top_ttl_seconds,
            coalesce=app_settings.provider_top_coalesce,
        )

        yield

        http_client: httpx.AsyncClient = components["http_client"]
        await http_client.aclose()
        _logger.info("app_shutdown", message="HTTP client closed")

    return _lifespan


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    s = app_settings or settings
    application = FastAPI(
        title=config.get("app", {}).get("name", "catalog-proxy"),
        version=__version__,
        description=(
            "Read-only movie/TV catalog lookups forwarded to TMDB, with a cached "
            "top-titles ranking per streaming provider."
        ),
        lifespan=_make_lifespan(s),
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=s.get_cors_origins())
    register_exception_handlers(application)

    application.include_router(catalog_router)
    application.include_router(health_router)

    return application


app = create_app()


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    uvicorn.run(
        "catalog_proxy.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )


if __name__ == "__main__":
    run()
