"""Tests for SimpleCache."""

from datetime import timedelta

import pytest

from fscache import (
    FileSystemCachePool,
    InMemoryStorage,
    InvalidArgumentError,
    PoolConfig,
    SimpleCache,
)


@pytest.fixture
def cache(memory_pool: FileSystemCachePool) -> SimpleCache:
    """Create a simple cache over an in-memory pool."""
    return SimpleCache(memory_pool)


class TestSimpleCache:
    """Tests for single-key operations."""

    def test_pool_property(
        self, cache: SimpleCache, memory_pool: FileSystemCachePool
    ) -> None:
        """Test the underlying pool is exposed."""
        assert cache.pool is memory_pool

    def test_set_and_get(self, cache: SimpleCache) -> None:
        """Test basic set and get operations."""
        assert cache.set("key", "value") is True
        assert cache.get("key") == "value"

    def test_get_default(self, cache: SimpleCache) -> None:
        """Test a miss returns the default."""
        assert cache.get("missing") is None
        assert cache.get("missing", "fallback") == "fallback"

    def test_cached_none_is_not_default(self, cache: SimpleCache) -> None:
        """Test a cached None is returned instead of the default."""
        cache.set("key", None)

        assert cache.get("key", "fallback") is None
        assert cache.has("key") is True

    def test_ttl(self, clock, cache: SimpleCache) -> None:
        """Test values expire after their TTL."""
        cache.set("seconds", 1, ttl=10)
        cache.set("delta", 2, ttl=timedelta(seconds=20))

        clock.advance(10)
        assert cache.get("seconds") is None
        assert cache.get("delta") == 2

        clock.advance(10)
        assert cache.get("delta") is None

    def test_zero_ttl_deletes(self, cache: SimpleCache) -> None:
        """Test a TTL of zero removes the key."""
        cache.set("key", "value")

        assert cache.set("key", "other", ttl=0) is True
        assert cache.has("key") is False

    def test_default_ttl_from_config(
        self, clock, memory_storage: InMemoryStorage
    ) -> None:
        """Test the pool's default TTL applies when none is given."""
        pool = FileSystemCachePool(
            memory_storage, config=PoolConfig(default_ttl=timedelta(seconds=5))
        )
        cache = SimpleCache(pool)

        cache.set("default", 1)
        cache.set("explicit", 2, ttl=60)

        clock.advance(5)
        assert cache.get("default") is None
        assert cache.get("explicit") == 2

    def test_explicit_default_ttl(self, clock, memory_pool: FileSystemCachePool) -> None:
        """Test a default TTL passed to the facade."""
        cache = SimpleCache(memory_pool, default_ttl=3)
        cache.set("key", 1)

        clock.advance(3)
        assert cache.has("key") is False

    def test_delete(self, cache: SimpleCache) -> None:
        """Test deleting a key, present or not."""
        cache.set("key", "value")

        assert cache.delete("key") is True
        assert cache.get("key") is None
        assert cache.delete("key") is True

    def test_clear(self, cache: SimpleCache) -> None:
        """Test clearing all keys."""
        cache.set("a", 1)
        cache.set("b", 2)

        assert cache.clear() is True
        assert cache.has("a") is False
        assert cache.has("b") is False

    def test_invalid_key(self, cache: SimpleCache) -> None:
        """Test illegal keys raise."""
        with pytest.raises(InvalidArgumentError):
            cache.set("a:b", 1)

        with pytest.raises(InvalidArgumentError):
            cache.get("")


class TestSimpleCacheMultiple:
    """Tests for multi-key operations."""

    def test_set_and_get_multiple(self, cache: SimpleCache) -> None:
        """Test setting and reading several keys."""
        assert cache.set_multiple({"a": 1, "b": 2}) is True

        assert cache.get_multiple(["a", "b", "c"], default=0) == {
            "a": 1,
            "b": 2,
            "c": 0,
        }

    def test_set_multiple_pairs_and_int_keys(self, cache: SimpleCache) -> None:
        """Test pairs are accepted and integer keys become strings."""
        assert cache.set_multiple([(1, "one"), ("two", 2)]) is True

        assert cache.get("1") == "one"
        assert cache.get("two") == 2

    def test_set_multiple_ttl(self, clock, cache: SimpleCache) -> None:
        """Test the TTL applies to every value."""
        cache.set_multiple({"a": 1, "b": 2}, ttl=5)

        clock.advance(5)
        assert cache.get_multiple(["a", "b"]) == {"a": None, "b": None}

    def test_set_multiple_validates_before_writing(
        self, cache: SimpleCache, memory_storage: InMemoryStorage
    ) -> None:
        """Test one bad key writes nothing."""
        with pytest.raises(InvalidArgumentError):
            cache.set_multiple({"good": 1, "b@d": 2})

        assert memory_storage.paths() == []

    def test_delete_multiple(self, cache: SimpleCache) -> None:
        """Test deleting several keys."""
        cache.set_multiple({"a": 1, "b": 2, "c": 3})

        assert cache.delete_multiple(["a", "c", "missing"]) is True
        assert cache.get_multiple(["a", "b", "c"]) == {"a": None, "b": 2, "c": None}

    @pytest.mark.parametrize("keys", ["abc", b"abc", 42, None])
    def test_keys_must_be_iterable(self, cache: SimpleCache, keys) -> None:
        """Test non-iterable keys (or a plain string) raise."""
        with pytest.raises(InvalidArgumentError):
            cache.get_multiple(keys)

        with pytest.raises(InvalidArgumentError):
            cache.delete_multiple(keys)

    @pytest.mark.parametrize("values", ["abc", 42, None])
    def test_values_must_be_iterable(self, cache: SimpleCache, values) -> None:
        """Test values that are neither mapping nor iterable raise."""
        with pytest.raises(InvalidArgumentError):
            cache.set_multiple(values)

    def test_generator_keys(self, cache: SimpleCache) -> None:
        """Test keys may come from a generator."""
        cache.set("k1", 1)

        result = cache.get_multiple(f"k{i}" for i in range(1, 3))

        assert result == {"k1": 1, "k2": None}
