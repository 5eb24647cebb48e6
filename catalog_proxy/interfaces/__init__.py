"""Public interface definitions for all external service providers.

Every external service is accessed through the abstract base classes in
this package.  Concrete adapters live in ``catalog_proxy/providers/`` and are
injected at startup in ``catalog_proxy/main.py``, so unit tests can pass
fakes or mocks without real network calls.

    Interface          →  Concrete implementations (in providers/)
    ───────────────────────────────────────────────────────────────
    ICatalogProvider   →  TMDBCatalogProvider
    ICacheProvider     →  MemoryCacheProvider
    IUserStore         →  SQLiteUserStore
"""

from catalog_proxy.interfaces.cache_provider import ICacheProvider
from catalog_proxy.interfaces.catalog_provider import ICatalogProvider
from catalog_proxy.interfaces.user_store import IUserStore

__all__ = [
    "ICacheProvider",
    "ICatalogProvider",
    "IUserStore",
]
