"""API middleware: CORS, request logging, and error handling.

Starlette middleware is a stack (last added, first executed).  In main.py:

    app.add_middleware(ErrorHandlingMiddleware)    # inner
    app.add_middleware(RequestLoggingMiddleware)   # outer

so RequestLoggingMiddleware sees the *final* status code, including the
500 that ErrorHandlingMiddleware produces from an application error.

Every failure leaves the API as ``{"error": "<message>"}``: application
errors with their message, anything unexpected with a generic message
(the traceback stays in the server log), and rejected request input
with the same 500 status before anything is forwarded upstream.
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from catalog_proxy.api.schemas import ErrorResponse
from catalog_proxy.utils.errors import CatalogProxyError, UpstreamError
from catalog_proxy.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware.  Defaults to ``["*"]`` for development."""
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Convert exceptions escaping a route into the uniform 500 error body.

    Upstream failures are never retried here and never answered from stale
    cache; the client decides whether to retry.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except CatalogProxyError as exc:
            _logger.error(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                upstream_status=exc.status_code if isinstance(exc, UpstreamError) else None,
                path=str(request.url.path),
            )
            return _error_response(500, exc.message)
        except Exception:
            _logger.exception("unhandled_error", path=str(request.url.path))
            return _error_response(500, "Internal server error")


# ---------------------------------------------------------------------------
# Exception handlers (validation / routing errors raised inside FastAPI)
# ---------------------------------------------------------------------------


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part not in ("path", "query"))
        problems.append(f"{location}: {err.get('msg', 'invalid value')}" if location else err.get("msg", ""))
    message = "; ".join(p for p in problems if p) or "Invalid request"
    _logger.info("request_rejected", path=str(request.url.path), reason=message)
    return _error_response(500, message)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


def register_exception_handlers(app: FastAPI) -> None:
    """Give validation and routing errors the same ``{"error": ...}`` body."""
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
