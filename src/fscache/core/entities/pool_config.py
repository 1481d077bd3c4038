"""Cache pool configuration entity."""

from dataclasses import dataclass
from datetime import timedelta

from fscache.core.exceptions import InvalidArgumentError


@dataclass
class PoolConfig:
    """Cache pool configuration.

    Attributes:
        folder: Sub-path of the storage root holding item and tag files.
            Leading and trailing slashes are stripped.
        commit_on_close: Commit deferred items when the pool is closed,
            leaves a ``with`` block or is garbage collected.
        default_ttl: TTL applied by SimpleCache when none is given.
            None means items never expire.
    """

    folder: str = "cache"
    commit_on_close: bool = True
    default_ttl: timedelta | None = None

    def __post_init__(self) -> None:
        """Normalize and validate the folder."""
        self.folder = self.folder.strip("/\\")
        if not self.folder:
            raise InvalidArgumentError("Cache folder cannot be empty")
