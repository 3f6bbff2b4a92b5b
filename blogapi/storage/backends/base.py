"""Abstract base class for storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """Abstract storage backend for upload I/O.

    Implementations must handle creating the root and writing files.
    """

    @abstractmethod
    async def ensure_directory(self, path: str) -> None:
        """Create a directory (and parents) if missing.

        Args:
            path: Directory path.
        """

    @abstractmethod
    async def write_file(self, path: str, data: bytes) -> None:
        """Write binary data to a file inside an existing directory.

        Args:
            path: Full file path.
            data: Binary data to write.

        Raises:
            OSError: If the write fails.
        """
