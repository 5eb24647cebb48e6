"""Unit tests for the structlog setup in catalog_proxy.utils.logging."""

from __future__ import annotations

import io
import logging

import httpx
import pytest

from catalog_proxy.providers.catalog.tmdb_provider import TMDBCatalogProvider
from catalog_proxy.utils.errors import UpstreamError
from catalog_proxy.utils.logging import configure_logging, get_logger
from tests.conftest import make_settings

_API_KEY = "tmdb-secret-in-query"


@pytest.fixture
def log_buffer():
    buf = io.StringIO()
    configure_logging(log_level="DEBUG", stream=buf)
    yield buf
    configure_logging()


class TestConfigureLogging:
    def test_structlog_and_stdlib_share_the_stream(self, log_buffer: io.StringIO) -> None:
        get_logger("tests.logging").info("structlog_event", answer=42)
        logging.getLogger("tests.stdlib").warning("stdlib event")

        output = log_buffer.getvalue()
        assert "structlog_event" in output
        assert "stdlib event" in output

    def test_http_client_loggers_limited_to_warnings(self, log_buffer: io.StringIO) -> None:
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    @pytest.mark.asyncio
    async def test_upstream_requests_never_log_the_api_key(self, log_buffer: io.StringIO) -> None:
        def _handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"genres": []})

        async with httpx.AsyncClient(transport=httpx.MockTransport(_handler)) as client:
            provider = TMDBCatalogProvider(settings=make_settings(tmdb_api_key=_API_KEY), http_client=client)
            await provider.genre_list("movie")

        assert _API_KEY not in log_buffer.getvalue()

    @pytest.mark.asyncio
    async def test_transport_failure_log_omits_the_url(self, log_buffer: io.StringIO) -> None:
        def _handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError(f"cannot reach {request.url}", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(_handler)) as client:
            provider = TMDBCatalogProvider(settings=make_settings(tmdb_api_key=_API_KEY), http_client=client)
            with pytest.raises(UpstreamError):
                await provider.genre_list("movie")

        output = log_buffer.getvalue()
        assert "tmdb_request_failed" in output
        assert _API_KEY not in output
