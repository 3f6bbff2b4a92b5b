"""Upload storage package.

Examples:
    >>> from blogapi.storage import StorageConfig, UploadService
    >>> service = UploadService.from_config(StorageConfig(root="./uploads"))
    >>> name = await service.store(data, "photo.png")
"""

from blogapi.storage.config import StorageConfig
from blogapi.storage.naming import extract_extension, generate_upload_name
from blogapi.storage.service import UploadService

__all__ = [
    "StorageConfig",
    "UploadService",
    "extract_extension",
    "generate_upload_name",
]
