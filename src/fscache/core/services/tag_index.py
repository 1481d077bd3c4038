"""Tag index - lists of item keys, one per tag."""

from collections.abc import Callable

from fscache.core.exceptions import SerializationError
from fscache.core.interfaces.serializer import ISerializer
from fscache.core.interfaces.storage_adapter import IStorageAdapter

TAG_SEPARATOR = "!"


class TagIndex:
    """Maintains one list of item keys per tag in storage.

    Each list is a whole serialized record; the storage only supports
    whole-value reads and writes, so every change is a read-modify-write.
    Two pools sharing a storage root can lose each other's updates in
    the window between the read and the write.
    """

    def __init__(
        self,
        storage: IStorageAdapter,
        serializer: ISerializer,
        path_resolver: Callable[[str], str],
    ) -> None:
        """Initialize the tag index.

        Args:
            storage: The storage adapter holding the lists.
            serializer: The serializer for list records.
            path_resolver: Maps a list name to its storage path.
        """
        self._storage = storage
        self._serializer = serializer
        self._path_resolver = path_resolver

    @staticmethod
    def tag_key(tag: str) -> str:
        """Return the list name of a tag."""
        return f"tag{TAG_SEPARATOR}{tag}"

    def get_list(self, name: str) -> list[str]:
        """Read a list, creating it empty if it does not exist.

        Args:
            name: The name of the list.

        Returns:
            The item keys in the list.

        Raises:
            StorageError: If the list cannot be read or created.
            SerializationError: If the stored list is corrupt.
        """
        path = self._path_resolver(name)

        if not self._storage.file_exists(path):
            self._storage.write(path, self._serializer.serialize([]))

        data = self._serializer.deserialize(self._storage.read(path))
        if not isinstance(data, list):
            raise SerializationError(
                "Tag list is not a list", {"name": name, "type": type(data).__name__}
            )
        return data

    def append_list_item(self, name: str, key: str) -> None:
        """Add an item key to a list.

        Args:
            name: The name of the list.
            key: The item key.
        """
        items = self.get_list(name)
        items.append(key)
        self._write_list(name, items)

    def remove_list_item(self, name: str, key: str) -> None:
        """Remove every occurrence of an item key from a list.

        Args:
            name: The name of the list.
            key: The item key to remove.
        """
        items = [item for item in self.get_list(name) if item != key]
        self._write_list(name, items)

    def remove_list(self, name: str) -> None:
        """Delete a list.

        Args:
            name: The name of the list.
        """
        self._storage.delete(self._path_resolver(name))

    def _write_list(self, name: str, items: list[str]) -> None:
        self._storage.write(self._path_resolver(name), self._serializer.serialize(items))
