"""Repositories over an AsyncSession, one per table."""

from blogapi.repositories.posts import PostRepository
from blogapi.repositories.users import UserRepository

__all__ = ["PostRepository", "UserRepository"]
