"""Read-through helper: cache lookup, loader on miss, store the result.

Cache failures never abort the surrounding request: a failing get is
treated as a miss and a failing set skips caching that result.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from blog.application.interfaces.services import ICacheStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ReadThroughCache:
    """Wraps an optional ICacheStore with degrade-to-miss semantics."""

    def __init__(self, cache: ICacheStore | None, ttl: int | None = None) -> None:
        self.cache = cache
        self.ttl = ttl

    async def get(self, key: str) -> Any | None:
        """Return cached payload or None on miss or cache failure."""
        if self.cache is None:
            return None
        try:
            return await self.cache.get(key)
        except Exception:
            logger.warning("Cache get failed for key %s; treating as miss", key, exc_info=True)
            return None

    async def set(self, key: str, payload: Any) -> bool:
        """Store payload; False (logged) on cache failure."""
        if self.cache is None:
            return False
        try:
            return await self.cache.set(key, payload, ttl=self.ttl)
        except Exception:
            logger.warning("Cache set failed for key %s; result not cached", key, exc_info=True)
            return False

    async def fetch(
        self,
        key: str,
        loader: Callable[[], Awaitable[T | None]],
        encode: Callable[[T], Any],
        decode: Callable[[Any], T],
    ) -> T | None:
        """Return the cached value for key, else load, cache and return it.

        None from the loader is returned as-is and not cached.
        """
        cached = await self.get(key)
        if cached is not None:
            try:
                return decode(cached)
            except (KeyError, TypeError, ValueError):
                logger.warning("Cache payload for %s is unreadable; reloading", key, exc_info=True)
        value = await loader()
        if value is not None:
            await self.set(key, encode(value))
        return value
