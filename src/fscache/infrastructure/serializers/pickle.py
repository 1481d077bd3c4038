"""Pickle serializer implementation."""

import pickle
from typing import Any

from fscache.core.exceptions import SerializationError


class PickleSerializer:
    """Pickle serializer for cache records.

    The default serializer: any picklable value survives a round trip
    with its exact type, including bytes, tuples and arbitrary objects.
    Only read cache folders you trust, unpickling runs code.
    """

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        """Initialize the pickle serializer.

        Args:
            protocol: Pickle protocol version to write.
        """
        self._protocol = protocol

    def serialize(self, value: Any) -> bytes:
        """Serialize value to bytes.

        Args:
            value: The Python object to serialize.

        Returns:
            The serialized value as bytes.

        Raises:
            SerializationError: If the value cannot be pickled.
        """
        try:
            return pickle.dumps(value, protocol=self._protocol)
        except (pickle.PicklingError, TypeError, AttributeError, RecursionError) as e:
            raise SerializationError(f"Failed to serialize value: {e}") from e

    def deserialize(self, data: bytes) -> Any:
        """Deserialize bytes to value.

        Args:
            data: The bytes to deserialize.

        Returns:
            The deserialized Python object.

        Raises:
            SerializationError: If the data cannot be unpickled.
        """
        try:
            return pickle.loads(data)
        except Exception as e:
            # Corrupt input can raise almost anything from pickle.loads.
            raise SerializationError(f"Failed to deserialize data: {e}") from e
