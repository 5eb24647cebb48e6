"""Shared concurrency primitives for upstream fan-out.

Two patterns are exposed:

1. **gather_or_cancel** -- run awaitables concurrently and fail fast: the
   first exception cancels every sibling that is still running and is then
   re-raised.  Used by composite queries, where a partial result must never
   be returned.

2. **InflightRegistry** -- per-key coalescing of concurrent work.  The first
   caller for a key starts the work; later callers for the same key await
   the same future instead of starting a duplicate (cache stampede
   mitigation).
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

import structlog

from catalog_proxy.utils.logging import get_logger

_T = TypeVar("_T")

_logger: structlog.BoundLogger = get_logger(__name__)


async def gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """Run *aws* concurrently and return their results in input order.

    Unlike ``asyncio.gather`` (which leaves siblings running after the first
    failure), the first exception cancels all pending tasks before it is
    propagated to the caller.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []

    try:
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        raise

    # Read every finished task's exception so none is reported as unretrieved.
    errors = [t.exception() for t in tasks if t in done and not t.cancelled()]
    first_error = next((exc for exc in errors if exc is not None), None)
    if first_error is not None:
        for task in pending:
            task.cancel()
        if pending:
            # Let cancelled siblings unwind before surfacing the error.
            await asyncio.gather(*pending, return_exceptions=True)
        raise first_error

    return [t.result() for t in tasks]


class InflightRegistry:
    """Coalesce concurrent calls that share a key onto one pending future.

    The entry for a key exists only while its work is running, so a call
    made after completion always starts fresh work.
    """

    def __init__(self) -> None:
        self._inflight: dict[str, asyncio.Future[Any]] = {}

    def __len__(self) -> int:
        return len(self._inflight)

    async def run(self, key: str, factory: Callable[[], Awaitable[_T]]) -> _T:
        """Await the in-flight future for *key*, or start ``factory()``."""
        existing = self._inflight.get(key)
        if existing is not None:
            _logger.debug("inflight_join", key=key)
            return await asyncio.shield(existing)

        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._inflight[key] = future
        try:
            result = await factory()
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as exc:
            future.set_exception(exc)
            # Mark retrieved so a future with no joiners does not warn.
            future.exception()
            raise
        else:
            future.set_result(result)
            return result
        finally:
            self._inflight.pop(key, None)
