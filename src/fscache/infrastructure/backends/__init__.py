"""Storage adapter implementations."""

from fscache.infrastructure.backends.local_filesystem import LocalFileSystem
from fscache.infrastructure.backends.memory import InMemoryStorage

__all__ = [
    "InMemoryStorage",
    "LocalFileSystem",
]
