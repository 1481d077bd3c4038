"""Pytest configuration for fscache tests."""

from collections.abc import Iterator

import pytest

from fscache import FileSystemCachePool, InMemoryStorage, LocalFileSystem
from fscache.utils import timestamps


class FrozenClock:
    """Callable clock standing in for ``timestamps.now``."""

    def __init__(self, start: int = 1_700_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FrozenClock:
    """Freeze the cache clock; tests move it with ``clock.advance()``."""
    frozen = FrozenClock()
    monkeypatch.setattr(timestamps, "now", frozen)
    return frozen


@pytest.fixture
def filesystem(tmp_path) -> LocalFileSystem:
    """Create a local file system rooted in a temporary directory."""
    return LocalFileSystem(tmp_path / "storage")


@pytest.fixture
def pool(filesystem: LocalFileSystem) -> Iterator[FileSystemCachePool]:
    """Create a cache pool on the local file system."""
    cache = FileSystemCachePool(filesystem)
    yield cache
    cache.clear()


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    """Create an empty in-memory storage."""
    return InMemoryStorage()


@pytest.fixture
def memory_pool(memory_storage: InMemoryStorage) -> FileSystemCachePool:
    """Create a cache pool on in-memory storage."""
    return FileSystemCachePool(memory_storage)
