"""Infrastructure layer implementations for fscache."""

from fscache.infrastructure.backends import InMemoryStorage, LocalFileSystem
from fscache.infrastructure.serializers import JsonSerializer, PickleSerializer

__all__ = [
    "InMemoryStorage",
    "LocalFileSystem",
    "JsonSerializer",
    "PickleSerializer",
]
