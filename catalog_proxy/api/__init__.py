"""Catalog proxy API layer: routes, schemas, and middleware."""

from catalog_proxy.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
    register_exception_handlers,
)
from catalog_proxy.api.routes import health_router, router
from catalog_proxy.api.schemas import ErrorResponse, HealthResponse, ProviderTopResponse

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "register_exception_handlers",
    "health_router",
    "router",
    "ErrorResponse",
    "HealthResponse",
    "ProviderTopResponse",
]
