"""Per-user key-value store adapters."""

from catalog_proxy.providers.user_store.sqlite_user_store import SQLiteUserStore

__all__ = ["SQLiteUserStore"]
