"""Cache: process-local TTL store for the read path.

Key format lives in blog.application.services.cache_keys; the store only
knows that a key's namespace is the prefix before the first separator.
"""

from blog.infrastructure.cache.memory_cache import CacheStats, CacheStore

__all__ = ["CacheStats", "CacheStore"]
