"""Application configuration with Pydantic Settings.

Settings are loaded from environment variables and a `.env` file.

Examples:
    >>> from blogapi.config import get_settings
    >>> settings = get_settings()
    >>> settings.JWT_ACCESS_EXPIRE_MINUTES
    1440

Tests:
    - tests/unit/test_config.py::TestSettings
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "dev-only-change-me"


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings.

    Attributes:
        DATABASE_URL: Database connection string (SQLite or PostgreSQL)
        JWT_SECRET_KEY: HMAC secret used to sign bearer tokens
        JWT_ACCESS_EXPIRE_MINUTES: Lifetime of an issued token
        UPLOAD_DIR: Directory that receives uploaded cover images
        UPLOAD_URL_PREFIX: Public path the upload directory is served under
        SEED_ON_STARTUP: Seed the admin account and sample posts at startup
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./blog.db",
        description="Database connection string",
    )

    # Application
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    DEBUG: bool = Field(default=False, description="Enable debug mode")
    CORS_ORIGINS: list[str] = Field(
        default=["*"],
        description="Origins allowed by the CORS middleware",
    )

    # Auth
    JWT_SECRET_KEY: str = Field(
        default=DEFAULT_JWT_SECRET,
        description="Secret used to sign access tokens",
    )
    JWT_ACCESS_EXPIRE_MINUTES: int = Field(
        default=1440,
        description="Access token lifetime in minutes",
    )

    # Uploads
    UPLOAD_DIR: str = Field(default="./uploads", description="Upload directory")
    UPLOAD_URL_PREFIX: str = Field(
        default="/uploads",
        description="URL prefix uploaded files are served under",
    )
    UPLOAD_MAX_BYTES: int = Field(
        default=5 * 1024 * 1024,
        ge=1,
        description="Maximum accepted upload size in bytes",
    )

    # Seeding
    SEED_ON_STARTUP: bool = Field(
        default=True,
        description="Seed default admin and sample posts when absent",
    )
    SEED_ADMIN_USERNAME: str = Field(default="admin")
    SEED_ADMIN_PASSWORD: str = Field(default="admin123")
    SEED_SAMPLE_POSTS: bool = Field(default=True)

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL format."""
        valid_prefixes = ("sqlite", "postgresql", "postgres")
        if not any(v.startswith(prefix) for prefix in valid_prefixes):
            raise ValueError(
                f"DATABASE_URL must start with one of: {valid_prefixes}"
            )
        return v

    @field_validator("UPLOAD_URL_PREFIX")
    @classmethod
    def validate_upload_prefix(cls, v: str) -> str:
        """Normalise the prefix to a leading slash and no trailing slash."""
        return "/" + v.strip("/")

    @model_validator(mode="after")
    def validate_secret(self) -> "Settings":
        """Refuse to run production with the development signing secret."""
        if self.is_production and self.JWT_SECRET_KEY == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET_KEY must be set in production")
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == Environment.PRODUCTION

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database."""
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: The application settings.
    """
    return Settings()
