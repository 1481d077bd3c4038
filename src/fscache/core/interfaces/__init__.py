"""Core interfaces (Protocol classes) for fscache."""

from fscache.core.interfaces.serializer import ISerializer
from fscache.core.interfaces.storage_adapter import IStorageAdapter

__all__ = [
    "ISerializer",
    "IStorageAdapter",
]
