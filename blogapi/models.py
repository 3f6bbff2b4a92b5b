"""SQLAlchemy models for the blog.

Defines the declarative base, the `users` table and the `blogs` table.

Examples:
    >>> from blogapi.models import BlogPost
    >>> post = BlogPost(title="Hello World", slug="hello-world", content="x")
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum as SQLEnum,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base class."""

    pass


class UserRole(str, Enum):
    """Roles a user can hold. Only administrators exist today."""

    ADMIN = "ADMIN"


class User(Base):
    """Account allowed to manage posts."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(100), unique=True, index=True, nullable=False
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole), default=UserRole.ADMIN, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, username={self.username!r})>"


class BlogPost(Base):
    """A blog post.

    Attributes:
        id: Server-assigned identifier
        title: Post title
        slug: URL-safe identifier derived from the title at creation
        content: Post body (markdown)
        cover_image: Optional cover image URL or upload name
        tags: Comma-separated tags, e.g. "python,fastapi"
        published: Whether the post is publicly listed
        created_at: Creation timestamp
        updated_at: Last mutation timestamp
    """

    __tablename__ = "blogs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(
        String(255), unique=True, index=True, nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    cover_image: Mapped[str | None] = mapped_column(String(512), default=None)
    tags: Mapped[str | None] = mapped_column(String(512), default=None)
    published: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    @property
    def tag_list(self) -> list[str]:
        """Tags split into a list."""
        if not self.tags:
            return []
        return [t for t in self.tags.split(",") if t]

    def __repr__(self) -> str:
        return f"<BlogPost(id={self.id!r}, slug={self.slug!r})>"
