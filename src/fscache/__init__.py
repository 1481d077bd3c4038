"""fscache - Persistent file system cache with tag invalidation.

A Python library for caching values in plain files, one file per item,
with expiration, deferred (batched) writes, and tags that invalidate
groups of items at once.

Example:
    from datetime import timedelta

    from fscache import FileSystemCachePool, LocalFileSystem, SimpleCache

    pool = FileSystemCachePool(LocalFileSystem("/var/cache/myapp"))

    # Item API
    item = pool.get_item("article_42")
    if not item.is_hit():
        item.set(render_article(42))
        item.expires_after(timedelta(hours=1))
        item.set_tags(["articles", "author_7"])
        pool.save(item)
    html = item.get()

    # Drop everything written by author 7
    pool.invalidate_tag("author_7")

    # Plain key/value API
    cache = SimpleCache(pool)
    cache.set("answer", 42, ttl=60)
    cache.get("answer")  # 42

Batched writes:
    for key, value in rows:
        pool.save_deferred(pool.get_item(key).set(value))
    pool.commit()
"""

from fscache.core.entities import CacheItem, FetchResult, ItemState, PoolConfig
from fscache.core.exceptions import (
    CacheError,
    CachePoolError,
    InvalidArgumentError,
    SerializationError,
    StorageError,
)
from fscache.core.interfaces import ISerializer, IStorageAdapter
from fscache.core.services import (
    TAG_SEPARATOR,
    FileSystemCachePool,
    SimpleCache,
    TagIndex,
)
from fscache.infrastructure import (
    InMemoryStorage,
    JsonSerializer,
    LocalFileSystem,
    PickleSerializer,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core entities
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
    # Core interfaces
    "ISerializer",
    "IStorageAdapter",
    # Core services
    "FileSystemCachePool",
    "SimpleCache",
    "TagIndex",
    "TAG_SEPARATOR",
    # Infrastructure implementations
    "InMemoryStorage",
    "LocalFileSystem",
    "JsonSerializer",
    "PickleSerializer",
]
