"""User store."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.models import User, UserRole, utcnow


class UserRepository:
    """Persists users. Username uniqueness is backed by a unique constraint."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_username(self, username: str) -> User | None:
        result = await self.session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def exists(self, username: str) -> bool:
        result = await self.session.execute(
            select(User.id).where(User.username == username)
        )
        return result.first() is not None

    async def add(self, username: str, password_hash: str, role: UserRole) -> User:
        """Insert a user and flush so constraint violations surface here.

        Raises:
            IntegrityError: If the username is already taken. The session
                has been rolled back when this propagates.
        """
        user = User(
            username=username,
            password_hash=password_hash,
            role=role,
            created_at=utcnow(),
        )
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise
        return user
