"""Upload storage configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from blogapi.config import Settings


class StorageConfig(BaseModel):
    """Configuration for upload storage.

    Attributes:
        root: Directory uploaded files are written to.
        url_prefix: Public path the root is served under.
        max_bytes: Largest accepted upload.
    """

    root: str = Field(default="./uploads", description="Upload root directory")
    url_prefix: str = Field(default="/uploads", description="Public URL prefix")
    max_bytes: int = Field(default=5 * 1024 * 1024, ge=1)

    @classmethod
    def from_settings(cls, settings: Settings) -> "StorageConfig":
        return cls(
            root=settings.UPLOAD_DIR,
            url_prefix=settings.UPLOAD_URL_PREFIX,
            max_bytes=settings.UPLOAD_MAX_BYTES,
        )
