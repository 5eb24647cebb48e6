"""TMDB provider implementing ICatalogProvider.

Talks to The Movie Database v3 REST API over an injected
``httpx.AsyncClient``.  Every call carries the server-held API key as the
``api_key`` query parameter plus the per-operation parameters; empty
parameters are dropped rather than sent blank.

Failures are never retried and never fall back to cached data.  Any
non-2xx status, transport error or undecodable body becomes an
:class:`UpstreamError`; a missing key becomes a :class:`ConfigurationError`.
"""

from __future__ import annotations

from typing import Any

import httpx

from catalog_proxy.config.settings import Settings
from catalog_proxy.interfaces.catalog_provider import ICatalogProvider
from catalog_proxy.utils.errors import ConfigurationError, UpstreamError
from catalog_proxy.utils.logging import get_logger

_PROVIDER_NAME = "tmdb"


class TMDBCatalogProvider(ICatalogProvider):
    """Catalog provider backed by the TMDB v3 API.

    The ``httpx.AsyncClient`` is injected and shared with the rest of the
    application; its timeout bounds how long a hung upstream call can stall
    a request.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        self._api_key = settings.tmdb_api_key.strip()
        self._base_url = settings.tmdb_base_url.rstrip("/")
        self._http = http_client
        self._logger = get_logger(__name__)

    # -- Request helper ---------------------------------------------------------

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        if not self._api_key:
            raise ConfigurationError(
                message="TMDB API key is not configured (set TMDB_API_KEY)",
                provider_name=_PROVIDER_NAME,
            )

        query: dict[str, str] = {"api_key": self._api_key}
        for name, value in (params or {}).items():
            if value is None or value == "":
                continue
            query[name] = str(value)

        url = f"{self._base_url}{path}"
        try:
            response = await self._http.get(url, params=query)
        except httpx.HTTPError as exc:
            self._logger.warning("tmdb_request_failed", path=path, error=type(exc).__name__)
            raise UpstreamError(
                message=f"TMDB request failed: {type(exc).__name__}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        if not response.is_success:
            self._logger.warning(
                "tmdb_http_error",
                path=path,
                status=response.status_code,
            )
            raise UpstreamError(
                message=f"TMDB error: {response.status_code} {response.reason_phrase}".rstrip(),
                provider_name=_PROVIDER_NAME,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(
                message="TMDB returned a non-JSON body",
                provider_name=_PROVIDER_NAME,
                status_code=response.status_code,
            ) from exc

        self._logger.debug("tmdb_request", path=path, status=response.status_code)
        return payload

    # -- ICatalogProvider implementation ------------------------------------------

    async def trending(self, media_type: str, time_window: str, page: int = 1) -> dict[str, Any]:
        return await self._get(f"/trending/{media_type}/{time_window}", {"page": page})

    async def search_multi(self, query: str, page: int = 1) -> dict[str, Any]:
        return await self._get("/search/multi", {"query": query, "page": page})

    async def discover(self, media_type: str, params: dict[str, str]) -> dict[str, Any]:
        return await self._get(f"/discover/{media_type}", params)

    async def title_details(self, media_type: str, title_id: int) -> dict[str, Any]:
        return await self._get(f"/{media_type}/{title_id}")

    async def season_details(self, tv_id: int, season_number: int) -> dict[str, Any]:
        return await self._get(f"/tv/{tv_id}/season/{season_number}")

    async def genre_list(self, media_type: str) -> dict[str, Any]:
        return await self._get(f"/genre/{media_type}/list")

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    def is_available(self) -> bool:
        return bool(self._api_key)
