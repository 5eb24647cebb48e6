"""Cache providers.

In-memory TTL cache used to memoize composite catalog queries (the
top-by-provider ranking costs two upstream calls per miss).

MemoryCacheProvider is fast but not shared across processes.  For
multi-worker deployments, swap in a Redis adapter implementing
ICacheProvider without changing any business logic.
"""

from catalog_proxy.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
