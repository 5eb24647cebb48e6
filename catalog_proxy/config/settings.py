"""Application settings loaded from environment variables via pydantic-settings.

Values come from two sources, in priority order:

  1. Environment variables, e.g. ``TMDB_API_KEY=abc123`` (always wins)
  2. The ``.env`` file in the project root (local development)

Field ``tmdb_api_key`` maps to env var ``TMDB_API_KEY``.  Defaults apply when
neither source sets a field.  ``.env`` is git-ignored; ``.env.example`` lists
the available variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Catalog proxy settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Upstream metadata provider ===
    # Empty string = "not configured": every upstream call fails with a
    # ConfigurationError until a key is supplied.
    tmdb_api_key: str = ""
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    tmdb_timeout_seconds: float = Field(default=10.0, gt=0)

    # === Top-by-provider composite query ===
    provider_top_ttl_seconds: float = Field(default=600.0, gt=0)  # 10 minutes
    provider_top_limit: int = Field(default=10, ge=1)
    provider_top_coalesce: bool = False  # per-key single-flight for concurrent misses
    default_region: str = "US"

    # === Cache ===
    cache_max_size: int = Field(default=1024, ge=1)

    # === Per-user store (collaborator, not used by the proxy routes) ===
    user_store_db_path: str = "data/user_store.db"

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: str = "*"  # comma-separated

    def has_tmdb_credentials(self) -> bool:
        """Return ``True`` when a non-blank TMDB API key is configured."""
        return bool(self.tmdb_api_key.strip())

    def get_cors_origins(self) -> list[str]:
        """Split ``cors_origins`` into a list, dropping blanks."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
