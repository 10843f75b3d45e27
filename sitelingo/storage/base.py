"""
Storage abstraction layer.

The pipeline never writes content itself: it reads source rows through
MetadataStorage when backfilling languages, and may share its transform
cache through CacheStorage. Implementations can be swapped (in-memory →
PostgreSQL, in-memory → Redis) without changing pipeline code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel


# =============================================================================
# Storage Interfaces
# =============================================================================


class MetadataStorage(ABC):
    """
    Storage for structured site content (projects, translation rows).
    
    Production Implementation: SQL database owned by the CMS backend
    Local Implementation: in-memory
    """
    
    @abstractmethod
    async def save(self, collection: str, id: str, data: dict[str, Any]) -> None:
        """Save (upsert) a document to a collection."""
        pass
    
    @abstractmethod
    async def get(self, collection: str, id: str) -> dict[str, Any] | None:
        """Get a document by ID."""
        pass
    
    @abstractmethod
    async def query(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """Query documents with optional equality filters."""
        pass


class CacheStorage(ABC):
    """
    Shared key-value cache, used when several API instances must see the
    same transform results.
    
    Production Implementation: Redis or similar
    Local Implementation: in-memory dict
    """
    
    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Set a value with optional TTL in seconds."""
        pass
    
    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Get a value."""
        pass
    
    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete a key."""
        pass
    
    @abstractmethod
    async def clear(self, prefix: str = "") -> int:
        """Delete all keys with the prefix, return how many were removed."""
        pass


# =============================================================================
# Storage Provider (dependency injection container)
# =============================================================================


class StorageProvider(BaseModel):
    """
    Container for storage backends.
    
    Initialize once at app startup; the pipeline receives it and uses the
    interfaces without knowing the underlying implementation.
    """
    
    model_config = {"arbitrary_types_allowed": True}
    
    metadata: MetadataStorage
    cache: CacheStorage | None = None


# =============================================================================
# Collection Names (for MetadataStorage)
# =============================================================================


class Collections:
    """Standard collection/table names."""
    
    PROJECTS = "projects"
    PROJECT_TRANSLATIONS = "project_translations"


def translation_row_id(project_id: str, language: str) -> str:
    """Row ID of a project translation (one row per project and language)."""
    return f"{project_id}:{language}"
