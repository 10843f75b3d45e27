"""
Storage abstractions.

Integration Points:
- MetadataStorage → CMS database (projects, project_translations)
- CacheStorage → Redis (shared transform cache across instances)
"""

from sitelingo.storage.base import (
    MetadataStorage,
    CacheStorage,
    StorageProvider,
    Collections,
    translation_row_id,
)
from sitelingo.storage.local import (
    InMemoryMetadataStorage,
    InMemoryCacheStorage,
    create_local_storage,
)

__all__ = [
    "MetadataStorage",
    "CacheStorage",
    "StorageProvider",
    "Collections",
    "translation_row_id",
    "InMemoryMetadataStorage",
    "InMemoryCacheStorage",
    "create_local_storage",
]
