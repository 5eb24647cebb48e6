"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. config/config.yaml  -- static defaults checked into the repo
  2. .env file           -- local developer overrides (not committed)
  3. Environment vars    -- set at deploy time

``load_config()`` reads the YAML file first, then deep-merges the
environment-based values on top:

    base = {"cache": {"max_size": 1024}}
    overrides = {"cache": {"provider_top_ttl_seconds": 600}}
    result = {"cache": {"max_size": 1024, "provider_top_ttl_seconds": 600}}
"""

from pathlib import Path

import yaml

from catalog_proxy.config.settings import Settings


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built settings; a fresh ``Settings()`` is read when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "upstream": {
            "base_url": settings.tmdb_base_url,
            "timeout_seconds": settings.tmdb_timeout_seconds,
            "credentials_configured": settings.has_tmdb_credentials(),
        },
        "cache": {
            "max_size": settings.cache_max_size,
            "provider_top_ttl_seconds": settings.provider_top_ttl_seconds,
            "provider_top_limit": settings.provider_top_limit,
            "provider_top_coalesce": settings.provider_top_coalesce,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
