"""In-memory storage adapter implementation."""

from fscache.core.exceptions import StorageError


class InMemoryStorage:
    """In-memory storage adapter backed by a dict.

    Suitable for tests and throwaway pools. Directories are implied
    by the files below them, or created explicitly.
    """

    def __init__(self) -> None:
        """Initialize an empty storage."""
        self._files: dict[str, bytes] = {}
        self._directories: set[str] = set()

    def read(self, path: str) -> bytes:
        """Read the given file.

        Raises:
            StorageError: If the file does not exist.
        """
        normalized = _normalize(path)
        try:
            return self._files[normalized]
        except KeyError:
            raise StorageError(
                f"Unable to read the file {path}. Error: no such file",
                {"path": path},
            ) from None

    def write(self, path: str, data: bytes) -> None:
        """Write the given content to the file, creating parent directories."""
        normalized = _normalize(path)
        parent = normalized.rpartition("/")[0]
        if parent:
            self.create_directory(parent)
        self._files[normalized] = bytes(data)

    def delete(self, path: str) -> None:
        """Delete the file. A missing file is ignored."""
        self._files.pop(_normalize(path), None)

    def file_exists(self, path: str) -> bool:
        """Check if the file exists."""
        return _normalize(path) in self._files

    def create_directory(self, path: str) -> None:
        """Create the directory and its parents."""
        parts = _normalize(path).split("/")
        for i in range(1, len(parts) + 1):
            self._directories.add("/".join(parts[:i]))

    def delete_directory(self, path: str) -> None:
        """Recursively delete the directory. A missing directory is ignored."""
        normalized = _normalize(path)
        prefix = f"{normalized}/"
        self._files = {
            name: data
            for name, data in self._files.items()
            if not name.startswith(prefix)
        }
        self._directories = {
            name
            for name in self._directories
            if name != normalized and not name.startswith(prefix)
        }

    def directory_exists(self, path: str) -> bool:
        """Check if the directory exists."""
        normalized = _normalize(path)
        if normalized in self._directories:
            return True
        prefix = f"{normalized}/"
        return any(name.startswith(prefix) for name in self._files)

    def paths(self) -> list[str]:
        """Return the paths of all stored files, sorted."""
        return sorted(self._files)

    def __len__(self) -> int:
        """Return the number of stored files."""
        return len(self._files)


def _normalize(path: str) -> str:
    return "/".join(part for part in path.replace("\\", "/").split("/") if part)
