"""End-to-end CLI runs in a child interpreter.

The child swaps ``httpx.AsyncClient`` for one bound to an
``httpx.MockTransport`` before the CLI starts, so the real startup order
(CLI logging setup, deferred import of catalog_proxy.main, upstream calls
through httpx) runs unchanged and nothing leaves the machine.
"""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[2]
_API_KEY = "tmdb-key-that-must-not-leak"

_DRIVER = """
import sys

import httpx

_RealAsyncClient = httpx.AsyncClient


def _handler(request):
    kind = "movie" if request.url.path.endswith("/movie") else "tv"
    return httpx.Response(
        200,
        json={"page": 1, "results": [{"id": kind + "-1", "popularity": 7.5}]},
    )


class _MockedAsyncClient(_RealAsyncClient):
    def __init__(self, *args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(_handler)
        super().__init__(*args, **kwargs)


httpx.AsyncClient = _MockedAsyncClient

from catalog_proxy.cli.catalog import main

sys.exit(main(sys.argv[1:]))
"""


def _run_cli(tmp_path: Path, *argv: str, log_level: str = "INFO") -> subprocess.CompletedProcess[str]:
    env = {
        **os.environ,
        "PYTHONPATH": str(_REPO_ROOT),
        "TMDB_API_KEY": _API_KEY,
        "APP_ENV": "test",
        "LOG_LEVEL": log_level,
    }
    return subprocess.run(
        [sys.executable, "-c", _DRIVER, *argv],
        cwd=tmp_path,
        env=env,
        capture_output=True,
        text=True,
        timeout=60,
    )


class TestCliProcess:
    def test_quiet_stdout_is_pure_json(self, tmp_path: Path) -> None:
        proc = _run_cli(tmp_path, "--quiet", "top", "8")

        assert proc.returncode == 0, proc.stderr
        body = json.loads(proc.stdout)
        assert body["provider_id"] == 8
        assert body["region"] == "US"
        assert {r["media_type"] for r in body["results"]} == {"movie", "tv"}

    @pytest.mark.parametrize("log_level", ["INFO", "DEBUG"])
    def test_verbose_logs_stay_off_stdout(self, tmp_path: Path, log_level: str) -> None:
        proc = _run_cli(tmp_path, "top", "8", "--region", "gb", log_level=log_level)

        assert proc.returncode == 0, proc.stderr
        assert json.loads(proc.stdout)["region"] == "GB"
        assert "provider_top_built" in proc.stderr

    @pytest.mark.parametrize("argv", [("top", "8"), ("search", "heat")])
    def test_api_key_never_logged(self, tmp_path: Path, argv: tuple[str, ...]) -> None:
        proc = _run_cli(tmp_path, *argv, log_level="DEBUG")

        assert proc.returncode == 0, proc.stderr
        assert _API_KEY not in proc.stdout
        assert _API_KEY not in proc.stderr
