"""Core services for fscache."""

from fscache.core.services.cache_pool import FileSystemCachePool
from fscache.core.services.simple_cache import SimpleCache
from fscache.core.services.tag_index import TAG_SEPARATOR, TagIndex

__all__ = [
    "FileSystemCachePool",
    "SimpleCache",
    "TagIndex",
    "TAG_SEPARATOR",
]
