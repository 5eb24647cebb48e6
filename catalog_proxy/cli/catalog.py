"""Command-line access to the catalog proxy.

Usage::

    python -m catalog_proxy.cli serve
    python -m catalog_proxy.cli top 8 --region US
    python -m catalog_proxy.cli search "blade runner" --page 2

``top`` and ``search`` run one lookup through the same service the HTTP API
uses and print the JSON result to stdout.  ``--quiet`` sends log output to
stderr at WARNING+ so stdout stays parseable.  Exit code is 0 on success
and 1 when the lookup fails.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys
from typing import Any, Sequence

from catalog_proxy.config.settings import Settings
from catalog_proxy.utils.errors import CatalogProxyError
from catalog_proxy.utils.logging import configure_logging


def _route_logs_to_stderr(quiet: bool, app_settings: Settings) -> None:
    """Send every log line to stderr so stdout carries only the JSON result.

    Importing ``catalog_proxy.main`` configures logging for the server (stdout,
    ``LOG_LEVEL``), so the import happens here first and the CLI setup is
    applied on top of it.  structlog caches loggers on first use, and nothing
    has logged yet at this point, so every later logger picks up stderr.
    """
    if quiet:
        # Read by main.py's Settings() at import time.
        os.environ["LOG_LEVEL"] = "WARNING"

    import catalog_proxy.main  # noqa: F401

    configure_logging(
        log_level="WARNING" if quiet else app_settings.log_level,
        stream=sys.stderr,
    )


async def _lookup(args: argparse.Namespace, app_settings: Settings) -> Any:
    # Deferred so `serve` and --help never build an HTTP client.
    from catalog_proxy.main import _build_all

    components = _build_all(app_settings)
    try:
        service = components["catalog_service"]
        if args.command == "top":
            region = service.resolve_region(args.region)
            results = await service.top_by_provider(args.provider_id, region)
            return {"provider_id": args.provider_id, "region": region, "results": results}
        return await service.search_multi(args.query, page=args.page)
    finally:
        await components["http_client"].aclose()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-proxy",
        description="Catalog proxy server and one-off catalog lookups.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors, to stderr",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve", help="Run the HTTP API with uvicorn")

    top = sub.add_parser("top", help="Top titles on a streaming provider")
    top.add_argument("provider_id", type=int, help="Upstream watch-provider id (e.g. 8)")
    top.add_argument("--region", default=None, help="ISO 3166-1 region (default from settings)")

    search = sub.add_parser("search", help="Search movies and tv shows")
    search.add_argument("query", help="Free-text query")
    search.add_argument("--page", type=int, default=1, help="1-based result page")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse *argv*, run the command, and return the process exit code."""
    args = _build_parser().parse_args(argv)
    app_settings = Settings()

    if args.command == "serve":
        from catalog_proxy.main import run

        run()
        return 0

    _route_logs_to_stderr(args.quiet, app_settings)

    try:
        result = asyncio.run(_lookup(args, app_settings))
    except CatalogProxyError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0
