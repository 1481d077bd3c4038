"""Domain entities for fscache."""

from fscache.core.entities.cache_item import (
    CacheItem,
    Fetcher,
    FetchResult,
    ItemState,
)
from fscache.core.entities.pool_config import PoolConfig

__all__ = [
    "CacheItem",
    "Fetcher",
    "FetchResult",
    "ItemState",
    "PoolConfig",
]
