"""Storage backends."""

from blogapi.storage.backends.base import StorageBackend
from blogapi.storage.backends.local import LocalStorageBackend

__all__ = ["LocalStorageBackend", "StorageBackend"]
