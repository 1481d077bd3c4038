"""Core domain layer for fscache."""

from fscache.core.entities import CacheItem, FetchResult, ItemState, PoolConfig
from fscache.core.exceptions import (
    CacheError,
    CachePoolError,
    InvalidArgumentError,
    SerializationError,
    StorageError,
)
from fscache.core.interfaces import ISerializer, IStorageAdapter
from fscache.core.services import FileSystemCachePool, SimpleCache, TagIndex

__all__ = [
    # Entities
    "CacheItem",
    "FetchResult",
    "ItemState",
    "PoolConfig",
    # Exceptions
    "CacheError",
    "CachePoolError",
    "InvalidArgumentError",
    "SerializationError",
    "StorageError",
    # Interfaces
    "ISerializer",
    "IStorageAdapter",
    # Services
    "FileSystemCachePool",
    "SimpleCache",
    "TagIndex",
]
