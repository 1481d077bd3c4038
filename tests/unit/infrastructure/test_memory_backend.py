"""Tests for InMemoryStorage."""

import pytest

from fscache.core.exceptions import StorageError
from fscache.infrastructure.backends.memory import InMemoryStorage


class TestInMemoryStorage:
    """Tests for InMemoryStorage."""

    @pytest.fixture
    def storage(self) -> InMemoryStorage:
        """Create a storage for testing."""
        return InMemoryStorage()

    def test_write_and_read(self, storage: InMemoryStorage) -> None:
        """Test basic write and read operations."""
        storage.write("cache/key", b"value")

        assert storage.read("cache/key") == b"value"
        assert storage.file_exists("cache/key") is True
        assert storage.directory_exists("cache") is True

    def test_read_missing(self, storage: InMemoryStorage) -> None:
        """Test reading a missing file raises StorageError."""
        with pytest.raises(StorageError) as exc_info:
            storage.read("missing")

        assert exc_info.value.context == {"path": "missing"}

    def test_paths_are_normalized(self, storage: InMemoryStorage) -> None:
        """Test leading, doubled and back slashes do not matter."""
        storage.write("/cache//a", b"1")

        assert storage.read("cache/a") == b"1"
        assert storage.file_exists("\\cache\\a") is True

    def test_delete(self, storage: InMemoryStorage) -> None:
        """Test deleting a file, present or not."""
        storage.write("key", b"value")

        storage.delete("key")
        storage.delete("key")

        assert storage.file_exists("key") is False

    def test_directories(self, storage: InMemoryStorage) -> None:
        """Test creating and recursively deleting directories."""
        storage.create_directory("a/b")
        storage.write("a/b/c", b"1")
        storage.write("a/d", b"2")
        storage.write("ab", b"3")

        assert storage.directory_exists("a") is True
        assert storage.directory_exists("a/b") is True

        storage.delete_directory("a")

        assert storage.directory_exists("a") is False
        assert storage.directory_exists("a/b") is False
        assert storage.paths() == ["ab"]

    def test_delete_missing_directory(self, storage: InMemoryStorage) -> None:
        """Test deleting a missing directory is a no-op."""
        storage.delete_directory("nowhere")

        assert len(storage) == 0

    def test_len(self, storage: InMemoryStorage) -> None:
        """Test counting stored files."""
        storage.write("a", b"1")
        storage.write("b", b"2")

        assert len(storage) == 2
