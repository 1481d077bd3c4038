"""Serializer implementations."""

from fscache.infrastructure.serializers.json import JsonSerializer
from fscache.infrastructure.serializers.pickle import PickleSerializer

__all__ = [
    "JsonSerializer",
    "PickleSerializer",
]
