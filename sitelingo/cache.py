"""
Transform cache.

Memoizes transform results by (operation, source language, target
language or mode, exact text). Entries expire after a TTL (24h by
default) and are never returned stale. A shared CacheStorage can sit
behind the in-process store so several instances reuse each other's
results.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

from cachetools import TTLCache

from sitelingo.core.models import CacheKey
from sitelingo.storage.base import CacheStorage

logger = logging.getLogger(__name__)


DEFAULT_TTL_SECONDS = 24 * 60 * 60
DEFAULT_MAX_ENTRIES = 10_000


@dataclass(frozen=True)
class CacheEntry:
    """A cached transform result."""

    value: str
    created_at: float


class TransformCache:
    """
    Thread-safe, TTL-bounded cache for transform results.

    Usage:
        cache = TransformCache(ttl_seconds=3600)
        key = CacheKey("translate", "de", "en", "Neubau")

        await cache.put(key, "New building")
        await cache.get(key)  # -> "New building"

    ``get`` returns None on a miss. Empty strings are valid cached values,
    so callers must compare against None.

    Shared entries carry their wall-clock creation time (``clock``), so an
    entry read by another instance expires at its original deadline.
    """

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        storage: CacheStorage | None = None,
        timer: Callable[[], float] = time.monotonic,
        clock: Callable[[], float] = time.time,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._timer = timer
        self._clock = clock
        self._storage = storage
        self._lock = threading.Lock()
        self._entries: TTLCache[CacheKey, CacheEntry] = TTLCache(
            maxsize=max_entries,
            ttl=ttl_seconds,
            timer=timer,
        )
        self.hits = 0
        self.misses = 0

    def _is_fresh(self, entry: CacheEntry) -> bool:
        return self._timer() - entry.created_at <= self.ttl_seconds

    def _from_shared(self, record: object) -> CacheEntry | None:
        """Rebuild a local entry from a shared record, or None if expired."""
        if not isinstance(record, dict) or not isinstance(record.get("value"), str):
            return None
        try:
            age = max(0.0, self._clock() - float(record["created_at"]))
        except (KeyError, TypeError, ValueError):
            return None
        if age > self.ttl_seconds:
            return None
        # local timer is per-process, so shift it back by the shared age
        return CacheEntry(value=record["value"], created_at=self._timer() - age)

    async def get(self, key: CacheKey) -> str | None:
        """Get a cached value, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and not self._is_fresh(entry):
                self._entries.pop(key, None)
                entry = None

        if entry is not None:
            self.hits += 1
            logger.debug(f"Cache hit for {key.operation}:{key.source_language}->{key.variant}")
            return entry.value

        if self._storage is not None:
            shared = self._from_shared(await self._storage.get(key.storage_key()))
            if shared is not None:
                with self._lock:
                    self._entries[key] = shared
                self.hits += 1
                return shared.value

        self.misses += 1
        return None

    async def put(self, key: CacheKey, value: str) -> None:
        """Cache a value. Concurrent writers for the same key: last write wins."""
        with self._lock:
            self._entries[key] = CacheEntry(value=value, created_at=self._timer())

        if self._storage is not None:
            await self._storage.set(
                key.storage_key(),
                {"value": value, "created_at": self._clock()},
                ttl=self.ttl_seconds,
            )

    async def clear(self) -> None:
        """Drop every entry, including those in shared storage."""
        with self._lock:
            self._entries.clear()
        if self._storage is not None:
            await self._storage.clear("transform:")
        self.hits = 0
        self.misses = 0
        logger.info("Transform cache cleared")

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)
