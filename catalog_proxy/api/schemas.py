"""Pydantic response schemas for the catalog proxy API.

Most catalog endpoints return the upstream JSON untouched, so only the
proxy's own payloads are modelled here: the composite provider ranking,
health, and the uniform error body.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ProviderTopResponse(BaseModel):
    """Top titles available on one streaming provider in one region."""

    provider_id: int
    region: str
    results: list[dict[str, Any]] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, bool]
    cache_entries: int = Field(ge=0)


class ErrorResponse(BaseModel):
    """Uniform error body returned for every failure."""

    error: str
