"""Custom exception hierarchy for the catalog proxy.

All application exceptions inherit from :class:`CatalogProxyError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "tmdb") caused the failure.

    CatalogProxyError      (base -- catch-all for any proxy error)
    +-- UpstreamError      (non-success status or transport error upstream)
        +-- ConfigurationError  (missing / invalid upstream credentials)

``ConfigurationError`` is an ``UpstreamError`` on purpose: a missing API key
makes every upstream-backed operation fail the same way until it is fixed,
so callers that handle upstream failures handle it too.

An empty search query is *not* an error.  The service short-circuits it to an
empty result set and never raises.
"""

from __future__ import annotations


class CatalogProxyError(Exception):
    """Base exception for all catalog proxy errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  ``__str__`` prefixes the provider name in brackets for log
    output, e.g. ``[tmdb] TMDB error: 404 Not Found``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


class UpstreamError(CatalogProxyError):
    """Raised when the metadata provider returns a non-success status or
    cannot be reached.

    ``status_code`` holds the upstream HTTP status when one was received and
    is ``None`` for transport-level failures (DNS, connect, timeout).
    """

    def __init__(
        self,
        message: str = "Upstream metadata provider request failed",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._status_code = status_code

    @property
    def status_code(self) -> int | None:
        return self._status_code


class ConfigurationError(UpstreamError):
    """Raised when upstream credentials are missing or invalid."""

    def __init__(
        self,
        message: str = "Upstream API key is not configured",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
