"""JSON serializer implementation."""

import base64
import json
from datetime import date, datetime
from typing import Any

from fscache.core.exceptions import SerializationError


class JsonSerializer:
    """JSON serializer for cache records.

    Handles serialization of Python objects to JSON bytes
    and deserialization back to Python objects. Types JSON cannot
    express are written as single-key tagged objects:

        bytes     -> {"__bytes__": "<base64>"}
        tuple     -> {"__tuple__": [...]}
        datetime  -> {"__datetime__": "<isoformat>"}
        date      -> {"__date__": "<isoformat>"}

    Mapping keys must be strings.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the JSON serializer.

        Args:
            encoding: Character encoding to use.
        """
        self._encoding = encoding

    def serialize(self, value: Any) -> bytes:
        """Serialize value to bytes.

        Args:
            value: The Python object to serialize.

        Returns:
            The serialized value as bytes.

        Raises:
            SerializationError: If the value cannot be serialized.
        """
        try:
            json_str = json.dumps(self._encode(value))
            return json_str.encode(self._encoding)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Failed to serialize value: {e}") from e

    def deserialize(self, data: bytes) -> Any:
        """Deserialize bytes to value.

        Args:
            data: The bytes to deserialize.

        Returns:
            The deserialized Python object.

        Raises:
            SerializationError: If the data cannot be deserialized.
        """
        try:
            json_str = data.decode(self._encoding)
            return json.loads(json_str, object_hook=self._decode_object)
        except (ValueError, TypeError, RecursionError) as e:
            raise SerializationError(f"Failed to deserialize data: {e}") from e

    def _encode(self, obj: Any) -> Any:
        """Turn a value into something json.dumps accepts.

        Args:
            obj: The object to encode.

        Returns:
            A JSON-serializable representation of the object.

        Raises:
            TypeError: If the object cannot be encoded.
        """
        if obj is None or isinstance(obj, (str, int, float, bool)):
            return obj
        if isinstance(obj, (bytes, bytearray)):
            return {"__bytes__": base64.b64encode(bytes(obj)).decode("ascii")}
        if isinstance(obj, tuple):
            return {"__tuple__": [self._encode(item) for item in obj]}
        if isinstance(obj, list):
            return [self._encode(item) for item in obj]
        if isinstance(obj, dict):
            encoded = {}
            for key, item in obj.items():
                if not isinstance(key, str):
                    raise TypeError(
                        f"Mapping keys must be str, not {type(key).__name__}"
                    )
                encoded[key] = self._encode(item)
            return encoded
        if isinstance(obj, datetime):
            return {"__datetime__": obj.isoformat()}
        if isinstance(obj, date):
            return {"__date__": obj.isoformat()}
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

    def _decode_object(self, obj: dict[str, Any]) -> Any:
        if len(obj) != 1:
            return obj
        if "__bytes__" in obj:
            return base64.b64decode(obj["__bytes__"], validate=True)
        if "__tuple__" in obj:
            return tuple(obj["__tuple__"])
        if "__datetime__" in obj:
            return datetime.fromisoformat(obj["__datetime__"])
        if "__date__" in obj:
            return date.fromisoformat(obj["__date__"])
        return obj
