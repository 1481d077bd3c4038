"""Local file system storage adapter."""

import logging
import os
import shutil
import tempfile

from fscache.core.exceptions import StorageError

logger = logging.getLogger(__name__)

FILE_MODE = 0o600
DIRECTORY_MODE = 0o700


class LocalFileSystem:
    """Storage adapter over a directory of the local file system.

    Every path is relative to the root location given at construction.
    Writes go to a temporary file in the target directory which then
    replaces the target, so a reader sees either the old or the new
    content, never a partial file.
    """

    def __init__(self, location: str | os.PathLike[str]) -> None:
        """Initialize the adapter, creating the root directory if needed.

        Args:
            location: The root directory of the storage.

        Raises:
            StorageError: If the root directory cannot be created.
        """
        self._root = os.fspath(location)
        self._ensure_directory_exists(self._root)

    @property
    def root(self) -> str:
        """The root directory of the storage."""
        return self._root

    def read(self, path: str) -> bytes:
        """Read the given file.

        Args:
            path: The file to read.

        Returns:
            The content of the file.

        Raises:
            StorageError: If the file is missing or unreadable.
        """
        location = self._prefix_path(path)
        try:
            with open(location, "rb") as f:
                return f.read()
        except OSError as e:
            raise StorageError(
                f"Unable to read the file {path}. Error: {e}", {"path": path}
            ) from e

    def write(self, path: str, data: bytes) -> None:
        """Write the given content to the file.

        Args:
            path: The file path.
            data: The content to write.

        Raises:
            StorageError: If the file cannot be written.
        """
        location = self._prefix_path(path)
        directory = os.path.dirname(location)
        self._ensure_directory_exists(directory)

        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".", suffix=".tmp")
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, FILE_MODE)
            os.replace(tmp_path, location)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageError(
                f"Unable to write file {path}. Error: {e}", {"path": path}
            ) from e

    def delete(self, path: str) -> None:
        """Delete the file. A missing file is ignored.

        Args:
            path: The file to delete.

        Raises:
            StorageError: If the file exists but cannot be removed.
        """
        location = self._prefix_path(path)
        try:
            os.remove(location)
        except FileNotFoundError:
            return
        except OSError as e:
            raise StorageError(
                f"Unable to delete the file {path}. Error: {e}", {"path": path}
            ) from e

    def file_exists(self, path: str) -> bool:
        """Check if the file exists."""
        return os.path.isfile(self._prefix_path(path))

    def create_directory(self, path: str) -> None:
        """Create the directory and any missing parent.

        Args:
            path: The directory to create.

        Raises:
            StorageError: If the directory cannot be created.
        """
        location = self._prefix_path(path)
        if os.path.isdir(location):
            try:
                os.chmod(location, DIRECTORY_MODE)
            except OSError as e:
                raise StorageError(
                    f"Unable to set the visibility for {path}. Error: {e}",
                    {"path": path},
                ) from e
            return

        try:
            os.makedirs(location, mode=DIRECTORY_MODE, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"Unable to create the directory {path}. Error: {e}", {"path": path}
            ) from e

    def delete_directory(self, path: str) -> None:
        """Recursively delete the directory. A missing directory is ignored.

        Args:
            path: The directory to delete.

        Raises:
            StorageError: If something inside cannot be removed.
        """
        location = self._prefix_path(path)
        if not os.path.isdir(location):
            return

        try:
            shutil.rmtree(location)
        except OSError as e:
            raise StorageError(
                f"Unable to delete the directory {path}. Error: {e}", {"path": path}
            ) from e
        logger.debug("Deleted directory %s", location)

    def directory_exists(self, path: str) -> bool:
        """Check if the directory exists."""
        return os.path.isdir(self._prefix_path(path))

    def _prefix_path(self, path: str) -> str:
        return os.path.join(self._root, path.lstrip("\\/"))

    def _ensure_directory_exists(self, directory: str) -> None:
        if os.path.isdir(directory):
            return

        try:
            os.makedirs(directory, mode=DIRECTORY_MODE, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"Unable to create the directory {directory}. Error: {e}",
                {"path": directory},
            ) from e
