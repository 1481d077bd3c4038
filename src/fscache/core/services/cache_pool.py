"""File system cache pool - main orchestrator for caching operations."""

import functools
import logging
from collections.abc import Iterable
from dataclasses import replace
from typing import Any, NoReturn

from fscache.core.entities.cache_item import CacheItem, FetchResult
from fscache.core.entities.pool_config import PoolConfig
from fscache.core.exceptions import (
    CachePoolError,
    InvalidArgumentError,
    SerializationError,
    StorageError,
)
from fscache.core.interfaces.serializer import ISerializer
from fscache.core.interfaces.storage_adapter import IStorageAdapter
from fscache.core.services.tag_index import TagIndex
from fscache.infrastructure.serializers.pickle import PickleSerializer
from fscache.utils import timestamps
from fscache.utils.validation import validate_filename, validate_key, validate_tag

# Failures a boolean operation reports as False instead of raising.
_RECOVERABLE_ERRORS = (StorageError, SerializationError)


class FileSystemCachePool:
    """Cache pool storing one file per item, with tag-based invalidation.

    This is the main entry point for cache operations, composing a
    storage adapter, a serializer and the tag index. Each item is stored
    as ``(value, tags, expiration_timestamp)`` under the pool folder; each
    tag has a list of item keys in the same folder.

    Items saved with ``save_deferred()`` stay in memory until ``commit()``,
    but reads on this pool already see them. Deferred items are committed
    on ``close()``, when leaving a ``with`` block, and on garbage collection.

    Example:
        pool = FileSystemCachePool(LocalFileSystem("/var/cache/app"))
        item = pool.get_item("user_42")
        if not item.is_hit():
            item.set(load_user(42)).expires_after(300).set_tags(["users"])
            pool.save(item)
        pool.invalidate_tag("users")
    """

    def __init__(
        self,
        storage: IStorageAdapter,
        folder: str | None = None,
        serializer: ISerializer | None = None,
        config: PoolConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the cache pool and create its folder.

        Args:
            storage: The storage adapter holding the cache files.
            folder: Folder for cache files, overriding ``config.folder``.
                Should not begin nor end with a slash (e.g. path/to/cache).
            serializer: Serializer for records. Defaults to PickleSerializer.
            config: Optional pool configuration. Uses defaults if not provided.
            logger: Logger for reported failures. Defaults to this module's.

        Raises:
            StorageError: If the folder cannot be created.
        """
        self._config = config or PoolConfig()
        if folder is not None:
            self._config = replace(self._config, folder=folder)

        self._storage = storage
        self._serializer = serializer or PickleSerializer()
        self._logger = logger or logging.getLogger(__name__)
        self._deferred: dict[str, CacheItem] = {}
        self._committing = False
        self._tags = TagIndex(self._storage, self._serializer, self._get_file_path)

        self._storage.create_directory(self._config.folder)

    def __enter__(self) -> "FileSystemCachePool":
        return self

    def __exit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        self.close()

    def __del__(self) -> None:
        # Commit whatever is still deferred before we go away.
        if getattr(self, "_deferred", None) and self._config.commit_on_close:
            self.commit()

    @property
    def config(self) -> PoolConfig:
        """Get the pool configuration."""
        return self._config

    @property
    def folder(self) -> str:
        """Get the folder holding the cache files."""
        return self._config.folder

    def set_folder(self, folder: str) -> None:
        """Set the folder for the cache files.

        Args:
            folder: The new folder, relative to the storage root.
        """
        self._config = replace(self._config, folder=folder)

    def set_logger(self, logger: logging.Logger) -> None:
        """Set the logger used to report failures."""
        self._logger = logger

    def close(self) -> None:
        """Commit deferred items, unless disabled in the configuration."""
        if self._config.commit_on_close:
            self.commit()

    def get_item(self, key: str) -> CacheItem:
        """Return the item for a key, a miss included.

        Args:
            key: The cache key.

        Returns:
            The cache item. Its stored state is read lazily.

        Raises:
            InvalidArgumentError: If the key is not legal.
        """
        self._validate_key(key)

        if key in self._deferred:
            item = self._deferred[key].copy()
            item.move_tags_to_previous()
            return item

        return CacheItem(key, functools.partial(self._fetch_object_from_cache, key))

    def get_items(self, keys: Iterable[str]) -> dict[str, CacheItem]:
        """Return the items for several keys, in key order.

        Raises:
            InvalidArgumentError: If any key is not legal.
        """
        keys = self._validate_keys(keys)
        return {key: self.get_item(key) for key in keys}

    def has_item(self, key: str) -> bool:
        """Check if the cache holds a live value for a key.

        Raises:
            InvalidArgumentError: If the key is not legal.
        """
        return self.get_item(key).is_hit()

    def clear(self) -> bool:
        """Delete every item, every tag list and every deferred item.

        Returns:
            True if the pool was cleared, False if storage failed.
        """
        self._deferred = {}

        try:
            self._storage.delete_directory(self._config.folder)
            self._storage.create_directory(self._config.folder)
        except StorageError as e:
            return self._report_failure(e, "clear")

        self._logger.debug("Cleared cache folder %s", self._config.folder)
        return True

    def delete_item(self, key: str) -> bool:
        """Remove an item. Removing a missing item succeeds.

        Returns:
            True if the item was removed, False if storage failed.

        Raises:
            InvalidArgumentError: If the key is not legal.
        """
        return self.delete_items([key])

    def delete_items(self, keys: Iterable[str]) -> bool:
        """Remove several items.

        Deferred items are committed first, so tag lists are up to date
        before the removed keys are purged from them.

        Returns:
            True if every item was removed, False otherwise.

        Raises:
            InvalidArgumentError: If any key is not legal.
        """
        keys = self._validate_keys(keys)

        deleted = True
        for key in keys:
            self._deferred.pop(key, None)
            # A running commit already applies the queue in order.
            if not self._committing:
                self.commit()

            try:
                self._pre_remove_item(key)
                self._storage.delete(self._get_file_path(key))
            except _RECOVERABLE_ERRORS as e:
                self._report_failure(e, "delete_items")
                deleted = False

        return deleted

    def save(self, item: CacheItem) -> bool:
        """Persist an item now.

        The key is removed from the lists of its previous tags and added
        to the lists of its current tags. An item that is already expired
        is deleted instead of written.

        Returns:
            True if the item was saved, False if storage failed.

        Raises:
            InvalidArgumentError: If item is not a CacheItem or its key
                cannot be used as a file name.
        """
        if not isinstance(item, CacheItem):
            self._handle_exception(
                InvalidArgumentError(
                    "Cache items are not transferable between pools. "
                    "Item MUST be a CacheItem.",
                    {"given": type(item).__name__},
                ),
                "save",
            )

        self._validate_key(item.key)
        try:
            self._get_file_path(item.key)
        except InvalidArgumentError as e:
            self._handle_exception(e, "save")

        try:
            self._remove_tag_entries(item)
        except _RECOVERABLE_ERRORS as e:
            return self._report_failure(e, "save")

        # Current tags are not indexed for an expired item: nothing is written.
        expiration = item.get_expiration_timestamp()
        if expiration is not None and expiration <= timestamps.now():
            return self.delete_item(item.key)

        try:
            self._save_tags(item)
            self._store_item_in_cache(item)
        except _RECOVERABLE_ERRORS as e:
            return self._report_failure(e, "save")

        return True

    def save_deferred(self, item: CacheItem) -> bool:
        """Queue an item to be persisted on the next commit.

        Returns:
            Always True.

        Raises:
            InvalidArgumentError: If item is not a CacheItem or its key
                is not legal.
        """
        if not isinstance(item, CacheItem):
            self._handle_exception(
                InvalidArgumentError(
                    "Cache items are not transferable between pools. "
                    "Item MUST be a CacheItem.",
                    {"given": type(item).__name__},
                ),
                "save_deferred",
            )
        self._validate_key(item.key)

        self._deferred[item.key] = item
        return True

    def commit(self) -> bool:
        """Persist every deferred item, in the order they were queued.

        Items leave the queue as they are saved; failed items are not
        retried. If a save raises, the items queued after it stay queued.

        Returns:
            True if every deferred item was saved (or there were none).
        """
        saved = True
        self._committing = True
        try:
            while self._deferred:
                item = self._deferred.pop(next(iter(self._deferred)))
                if not self.save(item):
                    saved = False
        finally:
            self._committing = False

        return saved

    def invalidate_tag(self, tag: str) -> bool:
        """Delete every item carrying a tag, then the tag list.

        Returns:
            True if all items and the tag list were deleted.
        """
        return self.invalidate_tags([tag])

    def invalidate_tags(self, tags: Iterable[str]) -> bool:
        """Delete every item carrying any of the tags, then the tag lists.

        Tag lists are only removed when every item was deleted, so a
        failed invalidation can be retried.

        Returns:
            True if all items and tag lists were deleted.

        Raises:
            InvalidArgumentError: If a tag is not legal.
        """
        tags = list(tags)
        for tag in tags:
            try:
                validate_tag(tag)
            except InvalidArgumentError as e:
                self._handle_exception(e, "invalidate_tags")

        try:
            keys: dict[str, None] = {}
            for tag in tags:
                keys.update(dict.fromkeys(self._tags.get_list(TagIndex.tag_key(tag))))
        except _RECOVERABLE_ERRORS as e:
            return self._report_failure(e, "invalidate_tags")

        success = self.delete_items(keys)

        if success:
            try:
                for tag in tags:
                    self._tags.remove_list(TagIndex.tag_key(tag))
            except StorageError as e:
                return self._report_failure(e, "invalidate_tags")

            self._logger.debug(
                "Invalidated tags %s (%d items)", ", ".join(tags), len(keys)
            )

        return success

    def _validate_key(self, key: Any) -> None:
        try:
            validate_key(key)
        except InvalidArgumentError as e:
            self._handle_exception(e, "validate_key")

    def _validate_keys(self, keys: Iterable[str]) -> list[str]:
        if isinstance(keys, str):
            keys = [keys]
        keys = list(keys)
        for key in keys:
            self._validate_key(key)
        return keys

    def _save_tags(self, item: CacheItem) -> None:
        """Add the item key to the list of every current tag."""
        for tag in item.get_tags():
            self._tags.append_list_item(TagIndex.tag_key(tag), item.key)

    def _pre_remove_item(self, key: str) -> None:
        """Remove the key from all its stored tag lists.

        If we failed to, a new item with the same key would be
        invalidated together with the tags of the old one.
        """
        self._remove_tag_entries(self.get_item(key))

    def _remove_tag_entries(self, item: CacheItem) -> None:
        """Remove the item key from the list of every previous tag."""
        for tag in item.get_previous_tags():
            self._tags.remove_list_item(TagIndex.tag_key(tag), item.key)

    def _get_file_path(self, key: str) -> str:
        validate_filename(key)
        return f"{self._config.folder}/{key}"

    def _store_item_in_cache(self, item: CacheItem) -> None:
        data = self._serializer.serialize(
            (item.get(), item.get_tags(), item.get_expiration_timestamp())
        )
        self._storage.write(self._get_file_path(item.key), data)

    def _fetch_object_from_cache(self, key: str) -> FetchResult:
        """Read an item record.

        Unreadable or corrupt records are misses. Expired records are
        removed, from storage and from their tag lists, and are misses.
        """
        path = self._get_file_path(key)

        try:
            data = self._serializer.deserialize(self._storage.read(path))
        except _RECOVERABLE_ERRORS:
            return FetchResult.miss()

        record = _unpack_record(data)
        if record is None:
            return FetchResult.miss()

        value, tags, expiration = record
        if expiration is not None and expiration <= timestamps.now():
            try:
                for tag in tags:
                    self._tags.remove_list_item(TagIndex.tag_key(tag), key)
                self._storage.delete(path)
            except _RECOVERABLE_ERRORS as e:
                self._handle_exception(e, "get_item")

            self._logger.debug("Evicted expired item %s", key)
            return FetchResult.miss()

        return FetchResult(
            hit=True, value=value, tags=tags, expiration_timestamp=expiration
        )

    def _report_failure(self, e: Exception, operation: str) -> bool:
        """Log a storage or serialization failure and return False."""
        self._logger.error(
            'Exception thrown when executing "%s": %s', operation, e, exc_info=e
        )
        return False

    def _handle_exception(self, e: Exception, operation: str) -> NoReturn:
        """Log an exception and raise it, wrapped unless it is our own."""
        if isinstance(e, InvalidArgumentError):
            self._logger.warning("%s", e.message)
        else:
            self._logger.error("%s", e, exc_info=e)

        if isinstance(e, (InvalidArgumentError, CachePoolError)):
            raise e

        raise CachePoolError(
            f'Exception thrown when executing "{operation}".'
        ) from e


def _unpack_record(data: Any) -> tuple[Any, list[str], int | None] | None:
    """Split a stored record, or return None if it is malformed."""
    if not isinstance(data, (tuple, list)) or len(data) != 3:
        return None

    value, tags, expiration = data
    if not isinstance(tags, (tuple, list)) or not all(_is_legal_tag(t) for t in tags):
        return None
    if expiration is not None and (
        not isinstance(expiration, int) or isinstance(expiration, bool)
    ):
        return None

    return value, list(tags), expiration


def _is_legal_tag(tag: Any) -> bool:
    """Check that a stored tag can still address its tag list."""
    try:
        validate_filename(TagIndex.tag_key(validate_tag(tag)))
    except InvalidArgumentError:
        return False
    return True
