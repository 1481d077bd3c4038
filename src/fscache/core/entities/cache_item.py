"""Cache item entity."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from fscache.core.exceptions import InvalidArgumentError
from fscache.utils import timestamps
from fscache.utils.validation import validate_tag


class ItemState(Enum):
    """Resolution state of a cache item.

    UNRESOLVED: Bound to a fetch callable that has not run yet.
    HIT: Holds a value (which may still be expired).
    MISS: Holds no value.
    """

    UNRESOLVED = "unresolved"
    HIT = "hit"
    MISS = "miss"


@dataclass(frozen=True)
class FetchResult:
    """Result of reading an item from storage.

    Attributes:
        hit: Whether a live record was found.
        value: The stored value (None on a miss).
        tags: The tags stored with the record.
        expiration_timestamp: Stored expiration in epoch seconds, or None.
    """

    hit: bool
    value: Any = None
    tags: list[str] = field(default_factory=list)
    expiration_timestamp: int | None = None

    @classmethod
    def miss(cls) -> "FetchResult":
        """Create the result of a cache miss."""
        return cls(hit=False)


Fetcher = Callable[[], FetchResult]


class CacheItem:
    """A single cached value with expiration and tags.

    An item is either created with a value, created empty (a miss), or bound
    to a fetcher. A bound item stays UNRESOLVED until something needs its
    stored state; the fetcher then runs exactly once and is dropped.

    Two tag sets are tracked. ``get_tags()`` returns the tags attached in
    this session, which will be written on save. ``get_previous_tags()``
    returns the tags the item had in storage, which the pool purges from the
    tag index on save and delete.
    """

    def __init__(
        self,
        key: str,
        fetcher: Fetcher | None = None,
        *,
        hit: bool = False,
        value: Any = None,
    ) -> None:
        """Initialize the cache item.

        Args:
            key: The cache key.
            fetcher: Optional callable returning the stored state.
            hit: Create a resolved hit holding ``value`` (ignored when a
                fetcher is given).
            value: The value of a resolved hit.
        """
        self._key = key
        self._fetcher: Fetcher | None = None
        self._value: Any = None
        self._expiration_timestamp: int | None = None
        self._expiration_set = False
        self._tags: dict[str, None] = {}
        self._previous_tags: list[str] = []

        if fetcher is not None:
            self._state = ItemState.UNRESOLVED
            self._fetcher = fetcher
        elif hit:
            self._state = ItemState.HIT
            self._value = value
        else:
            self._state = ItemState.MISS

    def __repr__(self) -> str:
        return f"CacheItem(key={self._key!r}, state={self._state.value})"

    @property
    def key(self) -> str:
        """The key of this item."""
        return self._key

    @property
    def state(self) -> ItemState:
        """The value state, without triggering a fetch."""
        return self._state

    def get_key(self) -> str:
        """Return the key of this item."""
        return self._key

    def set(self, value: Any) -> "CacheItem":
        """Set the value of this item.

        A pending fetch no longer decides the value nor the expiration,
        which stays unset unless given explicitly. The fetch is kept only
        to learn the previous tags, should anyone ask for them.

        Args:
            value: The value to cache. None is a legal value.

        Returns:
            This item.
        """
        if self._state is ItemState.UNRESOLVED:
            self._expiration_set = True
        self._value = value
        self._state = ItemState.HIT
        return self

    def get(self) -> Any:
        """Return the value, or None when this item is not a hit."""
        if not self.is_hit():
            return None
        return self._value

    def is_hit(self) -> bool:
        """Check if this item holds a live (non-expired) value."""
        self._resolve()

        if self._state is not ItemState.HIT:
            return False

        if self._expiration_timestamp is not None:
            return self._expiration_timestamp > timestamps.now()

        return True

    def get_expiration_timestamp(self) -> int | None:
        """Return the expiration as epoch seconds, or None for never."""
        self._resolve()
        return self._expiration_timestamp

    def expires_at(self, expiration: datetime | int | None) -> "CacheItem":
        """Set the point in time after which this item is expired.

        Args:
            expiration: A datetime (naive means UTC), epoch seconds, or
                None for no expiration.

        Returns:
            This item.

        Raises:
            InvalidArgumentError: For any other type.
        """
        if isinstance(expiration, datetime):
            timestamp = timestamps.from_datetime(expiration)
        elif expiration is None or _is_int(expiration):
            timestamp = expiration
        else:
            raise InvalidArgumentError(
                "Cache item ttl/expires_at must be of type integer or datetime.",
                {"given": type(expiration).__name__},
            )

        self._expiration_timestamp = timestamp
        self._expiration_set = True
        return self

    def expires_after(self, time: timedelta | int | None) -> "CacheItem":
        """Set the period after which this item is expired.

        Args:
            time: A timedelta, a number of seconds, or None for no
                expiration. Zero or negative values expire immediately.

        Returns:
            This item.

        Raises:
            InvalidArgumentError: For any other type.
        """
        if time is None:
            timestamp = None
        elif isinstance(time, timedelta) or _is_int(time):
            timestamp = timestamps.after(time)
        else:
            raise InvalidArgumentError(
                "Cache item ttl/expires_after must be of type integer or timedelta.",
                {"given": type(time).__name__},
            )

        self._expiration_timestamp = timestamp
        self._expiration_set = True
        return self

    def get_tags(self) -> list[str]:
        """Return the tags attached since the item was fetched.

        WARNING: these are not the stored tags, see ``get_previous_tags()``.
        """
        return list(self._tags)

    def get_previous_tags(self) -> list[str]:
        """Return the tags this item had in storage."""
        self._resolve()
        return list(self._previous_tags)

    def set_tags(self, tags: Iterable[str]) -> "CacheItem":
        """Replace the current tags.

        Args:
            tags: The new tags. Duplicates are collapsed.

        Returns:
            This item.

        Raises:
            InvalidArgumentError: If a tag is empty, not a string, or
                contains reserved characters.
        """
        if isinstance(tags, str):
            tags = [tags]

        new_tags: dict[str, None] = {}
        for tag in tags:
            new_tags[validate_tag(tag)] = None

        self._tags = new_tags
        return self

    def move_tags_to_previous(self) -> None:
        """Turn the current tags into the previous tags.

        Internal to the pool: applied to clones of deferred items so they
        look as if they had been read back from storage.
        """
        self._resolve()
        self._previous_tags = list(self._tags)
        self._tags = {}

    def copy(self) -> "CacheItem":
        """Return an independent, resolved copy of this item.

        The fetcher is never copied: an unresolved item is resolved first.
        """
        self._resolve()
        clone = CacheItem(self._key)
        clone._state = self._state
        clone._value = self._value
        clone._expiration_timestamp = self._expiration_timestamp
        clone._expiration_set = self._expiration_set
        clone._tags = dict(self._tags)
        clone._previous_tags = list(self._previous_tags)
        return clone

    __copy__ = copy

    def _resolve(self) -> None:
        """Run the pending fetcher, once, and load its result.

        Whatever was set locally (value, expiration) wins over the
        fetched state; the previous tags always come from the fetch.
        """
        fetcher = self._fetcher
        if fetcher is None:
            if self._state is ItemState.UNRESOLVED:
                self._state = ItemState.MISS
            return

        self._fetcher = None
        result = fetcher()

        self._previous_tags = list(result.tags)
        if self._state is ItemState.UNRESOLVED:
            self._state = ItemState.HIT if result.hit else ItemState.MISS
            self._value = result.value
        if not self._expiration_set:
            self._expiration_timestamp = None
            if _is_int(result.expiration_timestamp):
                self._expiration_timestamp = result.expiration_timestamp


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
