"""Upload service - writes cover images under server-generated names.

Examples:
    >>> from blogapi.storage.service import UploadService
    >>> service = UploadService.from_config(config)
    >>> await service.ensure_directory()
    >>> name = await service.store(data, "photo.png")
    >>> service.public_url(name)
    '/uploads/3f2b...e9.png'
"""

from __future__ import annotations

import logging
import os

from blogapi.errors import InvalidInput, StorageUnavailable
from blogapi.storage.backends.base import StorageBackend
from blogapi.storage.backends.local import LocalStorageBackend
from blogapi.storage.config import StorageConfig
from blogapi.storage.naming import generate_upload_name, is_safe_name

logger = logging.getLogger(__name__)


class UploadService:
    """Stores uploaded files.

    Attributes:
        config: Storage configuration.
        backend: Storage backend for I/O.
    """

    def __init__(self, config: StorageConfig, backend: StorageBackend | None = None) -> None:
        self.config = config
        self.backend = backend or LocalStorageBackend()

    @classmethod
    def from_config(cls, config: StorageConfig) -> "UploadService":
        """Create an UploadService from config."""
        return cls(config=config, backend=LocalStorageBackend())

    async def ensure_directory(self) -> None:
        """Create the upload root. Called once at startup."""
        try:
            await self.backend.ensure_directory(self.config.root)
        except OSError as e:
            # Not fatal at startup: uploads will report StorageUnavailable.
            logger.error(f"Could not create upload directory {self.config.root}: {e}")
            return
        logger.info(f"Upload directory ready: {self.config.root}")

    async def store(self, data: bytes, original_filename: str | None) -> str:
        """Write an upload and return its stored name.

        Args:
            data: File contents.
            original_filename: Client-supplied file name; only its extension
                is kept.

        Returns:
            Generated file name, e.g. ``3f2b...e9.png``.

        Raises:
            InvalidInput: If the file name is missing or the file is too large.
            StorageUnavailable: If the file cannot be written.
        """
        if not original_filename or not original_filename.strip():
            raise InvalidInput("File name is required")
        if len(data) > self.config.max_bytes:
            raise InvalidInput(f"File too large (max {self.config.max_bytes} bytes)")

        name = generate_upload_name(original_filename.strip())
        if not is_safe_name(name):
            raise InvalidInput(f"Filename contains invalid path sequence: {name}")

        path = os.path.join(self.config.root, name)
        try:
            await self.backend.write_file(path, data)
        except OSError as e:
            logger.error(f"Could not store upload {name}: {e}")
            raise StorageUnavailable(f"Could not store file {name}")

        logger.info(f"Upload stored: {name} ({len(data)} bytes)")
        return name

    def public_url(self, name: str) -> str:
        """Path the stored file is served from."""
        return f"{self.config.url_prefix.rstrip('/')}/{name}"
