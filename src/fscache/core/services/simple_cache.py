"""Simple key/value facade over a cache pool."""

from collections.abc import Iterable, Mapping
from datetime import timedelta
from typing import Any

from fscache.core.exceptions import InvalidArgumentError
from fscache.core.services.cache_pool import FileSystemCachePool

_UNSET: Any = object()


class SimpleCache:
    """Plain get/set/delete access to a cache pool.

    Values are read and written without going through CacheItem objects.
    Every call delegates to the pool, so tags, deferred items and
    expiration behave exactly as they do there.
    """

    def __init__(
        self,
        pool: FileSystemCachePool,
        default_ttl: timedelta | int | None = _UNSET,
    ) -> None:
        """Initialize the facade.

        Args:
            pool: The cache pool to delegate to.
            default_ttl: TTL used when ``set`` gets none. Defaults to the
                pool configuration's ``default_ttl``.
        """
        self._pool = pool
        if default_ttl is _UNSET:
            default_ttl = pool.config.default_ttl
        self._default_ttl = default_ttl

    @property
    def pool(self) -> FileSystemCachePool:
        """Get the underlying cache pool."""
        return self._pool

    def get(self, key: str, default: Any = None) -> Any:
        """Return the cached value for a key, or ``default`` on a miss."""
        item = self._pool.get_item(key)
        if not item.is_hit():
            return default
        return item.get()

    def set(self, key: str, value: Any, ttl: timedelta | int | None = None) -> bool:
        """Cache a value.

        Args:
            key: The cache key.
            value: The value to cache.
            ttl: Time to live. Falls back to the default TTL when None.
                Zero or negative deletes the key.

        Returns:
            True on success.
        """
        item = self._pool.get_item(key)
        item.set(value)
        item.expires_after(self._effective_ttl(ttl))
        return self._pool.save(item)

    def delete(self, key: str) -> bool:
        """Delete a key. Deleting a missing key succeeds."""
        return self._pool.delete_item(key)

    def clear(self) -> bool:
        """Delete every cached value."""
        return self._pool.clear()

    def has(self, key: str) -> bool:
        """Check if a key holds a live value.

        Prefer ``get`` for reading: another process may remove the value
        between the two calls.
        """
        return self._pool.has_item(key)

    def get_multiple(self, keys: Iterable[str], default: Any = None) -> dict[str, Any]:
        """Return the cached values for several keys.

        Args:
            keys: The cache keys.
            default: Value for keys that are missing or expired.

        Returns:
            A mapping of every requested key to its value.

        Raises:
            InvalidArgumentError: If keys is not iterable or a key is illegal.
        """
        items = self._pool.get_items(_as_key_list(keys))
        return {
            key: item.get() if item.is_hit() else default
            for key, item in items.items()
        }

    def set_multiple(
        self,
        values: Mapping[Any, Any] | Iterable[tuple[Any, Any]],
        ttl: timedelta | int | None = None,
    ) -> bool:
        """Cache several values in one commit.

        Args:
            values: A mapping, or an iterable of (key, value) pairs.
                Integer keys are turned into strings.
            ttl: Time to live, as for ``set``.

        Returns:
            True if every value was saved.

        Raises:
            InvalidArgumentError: If values is not iterable or a key is illegal.
        """
        if isinstance(values, Mapping):
            pairs = list(values.items())
        elif isinstance(values, Iterable) and not isinstance(values, (str, bytes)):
            pairs = list(values)
        else:
            raise InvalidArgumentError(
                "values is neither a mapping nor an iterable",
                {"given": type(values).__name__},
            )

        to_store: dict[str, Any] = {}
        for key, value in pairs:
            if isinstance(key, int) and not isinstance(key, bool):
                key = str(key)
            to_store[key] = value

        effective_ttl = self._effective_ttl(ttl)
        items = self._pool.get_items(to_store)

        success = True
        for key, item in items.items():
            item.set(to_store[key])
            item.expires_after(effective_ttl)
            success = self._pool.save_deferred(item) and success

        return self._pool.commit() and success

    def delete_multiple(self, keys: Iterable[str]) -> bool:
        """Delete several keys.

        Raises:
            InvalidArgumentError: If keys is not iterable or a key is illegal.
        """
        return self._pool.delete_items(_as_key_list(keys))

    def _effective_ttl(self, ttl: timedelta | int | None) -> timedelta | int | None:
        return self._default_ttl if ttl is None else ttl


def _as_key_list(keys: Iterable[str]) -> list[str]:
    if isinstance(keys, (str, bytes)) or not isinstance(keys, Iterable):
        raise InvalidArgumentError(
            "keys is neither a list nor an iterable",
            {"given": type(keys).__name__},
        )
    return list(keys)
