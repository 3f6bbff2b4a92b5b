"""Registration and login.

Both operations end by issuing a bearer token for the user.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from blogapi.auth.jwt_handler import TokenService
from blogapi.auth.passwords import Argon2PasswordHasher
from blogapi.errors import DuplicateUsername, InvalidCredentials, InvalidInput
from blogapi.models import UserRole
from blogapi.repositories.users import UserRepository

logger = logging.getLogger(__name__)


def validate_credentials(username: str | None, password: str | None) -> tuple[str, str]:
    """Return the stripped username and the password, or raise InvalidInput."""
    username = (username or "").strip()
    if not username:
        raise InvalidInput("Username is required")
    if not password:
        raise InvalidInput("Password is required")
    return username, password


class AuthService:
    def __init__(
        self,
        users: UserRepository,
        hasher: Argon2PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, username: str, password: str) -> str:
        """Create an admin user and return a token for it.

        Raises:
            InvalidInput: If username or password is blank.
            DuplicateUsername: If the username is already taken.
        """
        username, password = validate_credentials(username, password)

        if await self.users.exists(username):
            raise DuplicateUsername("Username already exists")

        try:
            user = await self.users.add(
                username=username,
                password_hash=self.hasher.hash(password),
                role=UserRole.ADMIN,
            )
        except IntegrityError:
            # lost a race with a concurrent registration
            raise DuplicateUsername("Username already exists")

        logger.info(f"User registered: {user.username}")
        return self.tokens.issue(user.username, user.role)

    async def login(self, username: str, password: str) -> str:
        """Verify credentials and return a token.

        Raises:
            InvalidCredentials: If the user is unknown or the password is wrong.
        """
        username = (username or "").strip()
        user = await self.users.get_by_username(username) if username else None

        if user is None or not self.hasher.verify(password or "", user.password_hash):
            logger.warning(f"Failed login for username: {username!r}")
            raise InvalidCredentials("Invalid username or password")

        return self.tokens.issue(user.username, user.role)
