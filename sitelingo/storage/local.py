"""
Local storage implementations for development and tests.

In-memory implementations that work without any external services.
"""

from __future__ import annotations

import copy
import time
from datetime import datetime, timezone
from typing import Any

from sitelingo.storage.base import (
    CacheStorage,
    MetadataStorage,
    StorageProvider,
)


# =============================================================================
# In-Memory Metadata Storage
# =============================================================================


class InMemoryMetadataStorage(MetadataStorage):
    """In-memory document storage for development."""
    
    def __init__(self):
        self._data: dict[str, dict[str, dict[str, Any]]] = {}
    
    async def save(self, collection: str, id: str, data: dict[str, Any]) -> None:
        if collection not in self._data:
            self._data[collection] = {}
        self._data[collection][id] = {
            **copy.deepcopy(data),
            "id": id,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
    
    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        doc = self._data.get(collection, {}).get(id)
        return copy.deepcopy(doc) if doc is not None else None
    
    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        if collection not in self._data:
            return []
        
        results = list(self._data[collection].values())
        
        if filters:
            results = [
                doc for doc in results
                if all(doc.get(key) == value for key, value in filters.items())
            ]
        
        return [copy.deepcopy(doc) for doc in results[offset:offset + limit]]


# =============================================================================
# In-Memory Cache Storage
# =============================================================================


class InMemoryCacheStorage(CacheStorage):
    """In-memory cache for development."""
    
    def __init__(self, timer=time.monotonic):
        self._cache: dict[str, tuple[Any, float | None]] = {}
        self._timer = timer
    
    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        expires_at = self._timer() + ttl if ttl else None
        self._cache[key] = (value, expires_at)
    
    async def get(self, key: str) -> Any | None:
        if key not in self._cache:
            return None
        
        value, expires_at = self._cache[key]
        if expires_at is not None and self._timer() >= expires_at:
            del self._cache[key]
            return None
        
        return value
    
    async def delete(self, key: str) -> bool:
        if key in self._cache:
            del self._cache[key]
            return True
        return False
    
    async def clear(self, prefix: str = "") -> int:
        keys = [k for k in self._cache if k.startswith(prefix)]
        for key in keys:
            del self._cache[key]
        return len(keys)


# =============================================================================
# Factory
# =============================================================================


def create_local_storage(shared_cache: bool = False) -> StorageProvider:
    """Create a StorageProvider with in-memory implementations."""
    return StorageProvider(
        metadata=InMemoryMetadataStorage(),
        cache=InMemoryCacheStorage() if shared_cache else None,
    )
