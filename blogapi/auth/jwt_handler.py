"""JWT access token management.

Access tokens are HS256, carry the username (`sub`) and role, and expire
after a fixed lifetime. There is no server-side session state: a token is
valid exactly when its signature verifies and it has not expired.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from blogapi.config import Settings
from blogapi.errors import InvalidToken
from blogapi.models import UserRole

JWT_ALGORITHM = "HS256"
TOKEN_TYPE = "access"


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    role: UserRole
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Issues and validates signed bearer tokens.

    The secret is fixed at construction and never changes for the life
    of the process.
    """

    def __init__(self, secret: str, expire_minutes: int) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.JWT_SECRET_KEY,
            expire_minutes=settings.JWT_ACCESS_EXPIRE_MINUTES,
        )

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return self._expire_minutes * 60

    def issue(self, subject: str, role: UserRole) -> str:
        """Create a signed access token.

        Args:
            subject: Username the token is issued to.
            role: Role of that user.

        Returns:
            Encoded JWT string.
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": subject,
            "role": role.value,
            "iat": now,
            "exp": now + timedelta(minutes=self._expire_minutes),
            "type": TOKEN_TYPE,
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def validate(self, token: str) -> TokenClaims:
        """Decode and validate an access token.

        Raises:
            InvalidToken: If the token is malformed, tampered with or expired.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidToken("Access token has expired")
        except jwt.InvalidTokenError as e:
            raise InvalidToken(f"Invalid access token: {e}")

        if payload.get("type") != TOKEN_TYPE:
            raise InvalidToken("Token is not an access token")

        subject = payload.get("sub")
        if not subject or not isinstance(subject, str):
            raise InvalidToken("Token missing subject")

        try:
            role = UserRole(payload.get("role"))
        except ValueError:
            raise InvalidToken("Token carries an unknown role")

        return TokenClaims(
            subject=subject,
            role=role,
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
