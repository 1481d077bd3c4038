"""Storage adapter interface."""

from typing import Protocol


class IStorageAdapter(Protocol):
    """Contract for byte-level storage over a rooted path namespace.

    Paths are relative to the adapter's root and use ``/`` as separator.
    Implementations raise StorageError on I/O failure.
    """

    def read(self, path: str) -> bytes:
        """Read the whole content of a file.

        Args:
            path: The file path.

        Returns:
            The file content.

        Raises:
            StorageError: If the file is missing or cannot be read.
        """
        ...

    def write(self, path: str, data: bytes) -> None:
        """Replace the content of a file, creating parent directories.

        Readers must never observe a partially written file.

        Args:
            path: The file path.
            data: The new content.

        Raises:
            StorageError: If the file cannot be written.
        """
        ...

    def delete(self, path: str) -> None:
        """Delete a file. Deleting a missing file is a no-op.

        Args:
            path: The file path.

        Raises:
            StorageError: If the file exists but cannot be removed.
        """
        ...

    def file_exists(self, path: str) -> bool:
        """Check if a file exists.

        Args:
            path: The file path.

        Returns:
            True if the path is an existing file, False otherwise.
        """
        ...

    def create_directory(self, path: str) -> None:
        """Create a directory and its parents if needed.

        Args:
            path: The directory path.
        """
        ...

    def delete_directory(self, path: str) -> None:
        """Recursively delete a directory. A missing directory is a no-op.

        Args:
            path: The directory path.
        """
        ...

    def directory_exists(self, path: str) -> bool:
        """Check if a directory exists.

        Args:
            path: The directory path.

        Returns:
            True if the path is an existing directory, False otherwise.
        """
        ...
