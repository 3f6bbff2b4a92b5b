"""Local filesystem storage backend using pathlib."""

from __future__ import annotations

from pathlib import Path

from blogapi.storage.backends.base import StorageBackend


class LocalStorageBackend(StorageBackend):
    """Pathlib-based local filesystem storage backend."""

    async def ensure_directory(self, path: str) -> None:
        """Create a local directory and its parents."""
        Path(path).mkdir(parents=True, exist_ok=True)

    async def write_file(self, path: str, data: bytes) -> None:
        """Write binary data to a local file.

        The parent directory is not created here; a missing upload
        directory is reported as an error.
        """
        Path(path).write_bytes(data)
