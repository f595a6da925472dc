"""Process-local TTL cache used for the read path.

Provides the async ICacheStore contract over a cachetools TLRUCache. Values
are stored JSON-encoded (same as a networked cache would) so callers always
get an independent copy back. A secondary index from namespace to keys lets
invalidation purge a namespace without scanning the whole key space.

Each service instance holds its own store; writes on one instance do not
invalidate another instance's entries (bounded by TTL only).
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from cachetools import TLRUCache

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300
DEFAULT_CHECK_PERIOD_SECONDS = 60
DEFAULT_MAX_ENTRIES = 10_000


@dataclass
class CacheStats:
    """Counters for diagnostics."""

    hits: int = 0
    misses: int = 0
    sets: int = 0
    evictions: int = 0


def _time_to_use(_key: str, entry: tuple[str, int], now: float) -> float:
    # entry is (serialized value, ttl seconds)
    return now + entry[1]


class CacheStore:
    """In-memory key/value store with per-entry TTL and a periodic expiry sweep.

    Expired entries are dropped before every read, so correctness never
    depends on sweep timing. Construct one per process (see blog.core.lifespan)
    and inject it; tests pass a fake clock to advance time without sleeping.
    """

    def __init__(
        self,
        default_ttl: int = DEFAULT_TTL_SECONDS,
        check_period: float = DEFAULT_CHECK_PERIOD_SECONDS,
        *,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
        separator: str = ":",
    ) -> None:
        if default_ttl <= 0:
            raise ValueError("default_ttl must be positive")
        self.default_ttl = default_ttl
        self.check_period = check_period
        self.separator = separator
        self._clock = clock
        self._entries: TLRUCache[str, tuple[str, int]] = TLRUCache(
            maxsize=max_entries, ttu=_time_to_use, timer=clock
        )
        self._namespaces: defaultdict[str, set[str]] = defaultdict(set)
        self._sweeper: asyncio.Task[None] | None = None
        self.stats = CacheStats()

    def namespace_of(self, key: str) -> str:
        return key.split(self.separator, 1)[0]

    def _unindex(self, key: str) -> None:
        namespace = self.namespace_of(key)
        members = self._namespaces.get(namespace)
        if members is not None:
            members.discard(key)
            if not members:
                del self._namespaces[namespace]

    def _remove(self, key: str) -> bool:
        try:
            del self._entries[key]
        except KeyError:
            # Missing, or already expired (TLRUCache drops it and raises).
            found = False
        else:
            found = True
        self._unindex(key)
        return found

    def _expire(self) -> int:
        expired = self._entries.expire(self._clock())
        for key, _ in expired:
            self._unindex(key)
        self.stats.evictions += len(expired)
        return len(expired)

    async def get(self, key: str) -> Any | None:
        """Return the cached value (decoded copy) or None if missing or expired."""
        self._expire()
        entry = self._entries.get(key)
        if entry is None:
            self.stats.misses += 1
            logger.debug("Cache MISS: %s", key)
            return None
        self.stats.hits += 1
        logger.debug("Cache HIT: %s", key)
        return json.loads(entry[0])

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value with TTL (seconds). Returns True on success.

        Args:
            key: Cache key (use blog.application.services.cache_keys builders).
            value: JSON-serializable payload; None is not cacheable since
                get() reports a miss as None.
            ttl: Time-to-live; None uses default_ttl.

        Returns:
            True if stored; False for None, a non-positive ttl or an
            unserializable value.
        """
        if value is None:
            logger.warning("Cache SET rejected for %s: None is not cacheable", key)
            return False
        effective_ttl = self.default_ttl if ttl is None else ttl
        if effective_ttl <= 0:
            logger.warning("Cache SET rejected for %s: ttl must be positive (got %s)", key, ttl)
            return False
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError):
            logger.warning("Cache SET skipped for %s: value is not JSON-serializable", key)
            return False
        self._entries[key] = (serialized, effective_ttl)
        self._namespaces[self.namespace_of(key)].add(key)
        self.stats.sets += 1
        logger.debug("Cache SET: %s (TTL: %ss)", key, effective_ttl)
        return True

    async def delete(self, key: str) -> int:
        """Remove key. Returns number of keys removed (0 or 1)."""
        removed = int(self._remove(key))
        if removed:
            logger.debug("Cache DELETE: %s", key)
        return removed

    async def delete_many(self, keys: list[str]) -> int:
        """Remove keys. Returns number of keys removed."""
        return sum(int(self._remove(key)) for key in keys)

    async def keys(self) -> list[str]:
        """Return all live (non-expired) keys."""
        self._expire()
        return [k for k in list(self._entries) if k in self._entries]

    async def keys_in_namespace(self, namespace: str) -> list[str]:
        """Return live keys in namespace (uses the namespace index)."""
        self._expire()
        members = list(self._namespaces.get(namespace, ()))
        live = [k for k in members if k in self._entries]
        # Entries pushed out by max_entries leave stale index members.
        for key in set(members).difference(live):
            self._unindex(key)
        return live

    async def clear(self) -> int:
        """Drop every entry. Returns number of entries removed."""
        count = len(self._entries)
        self._entries.clear()
        self._namespaces.clear()
        logger.warning("Cache CLEARED: %s keys deleted", count)
        return count

    def __len__(self) -> int:
        return len(self._entries)

    def sweep_expired(self) -> int:
        """Evict every expired entry. Returns number evicted."""
        evicted = self._expire()
        if evicted:
            logger.debug("Cache SWEEP: %s expired keys evicted", evicted)
        return evicted

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self.check_period)
            try:
                self.sweep_expired()
            except Exception:
                logger.exception("Cache sweep failed")

    def start_sweeper(self) -> None:
        """Start the periodic expiry sweep on the running event loop. Call on app startup."""
        if self._sweeper is not None and not self._sweeper.done():
            return
        self._sweeper = asyncio.create_task(self._sweep_loop())
        logger.info("Cache sweeper started (every %ss)", self.check_period)

    async def stop_sweeper(self) -> None:
        """Cancel the sweep task. Call on app shutdown."""
        if self._sweeper is None:
            return
        self._sweeper.cancel()
        try:
            await self._sweeper
        except asyncio.CancelledError:
            pass
        self._sweeper = None
        logger.info("Cache sweeper stopped")
