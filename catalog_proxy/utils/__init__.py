"""Utility modules for the catalog proxy.

- **errors** -- exception hierarchy rooted at CatalogProxyError; upstream
  failures and configuration failures are distinct types so the HTTP
  boundary can log them precisely before returning the uniform error body.
- **concurrency** -- fail-fast fan-out and per-key in-flight coalescing.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from catalog_proxy.utils.concurrency import InflightRegistry, gather_or_cancel
from catalog_proxy.utils.errors import CatalogProxyError, ConfigurationError, UpstreamError
from catalog_proxy.utils.logging import configure_logging, get_logger

__all__ = [
    "CatalogProxyError",
    "ConfigurationError",
    "InflightRegistry",
    "UpstreamError",
    "configure_logging",
    "gather_or_cancel",
    "get_logger",
]
