"""Exception hierarchy for fscache.

Every error raised by the library inherits from CacheError, which carries
an optional structured context rendered in ``str()``.
"""

from typing import Any


class CacheError(Exception):
    """Base exception for all fscache errors.

    Attributes:
        message: Human-readable error message.
        context: Optional structured context for logging/debugging.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class InvalidArgumentError(CacheError, ValueError):
    """Raised for an illegal key, tag, expiration or item.

    Never swallowed by the pool, whatever the operation's return type.
    """

    pass


class CachePoolError(CacheError):
    """Raised when a pool operation fails and cannot degrade gracefully.

    The original exception is available as ``__cause__``.
    """

    pass


class StorageError(CacheError):
    """Raised by storage adapters on a missing file or an I/O failure.

    Context should include:
        - path: The path relative to the storage root
    """

    pass


class SerializationError(CacheError):
    """Raised when serialization or deserialization fails."""

    pass
