"""FastAPI dependencies for authentication.

Every protected request re-validates its own bearer token; nothing is
remembered between requests.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.auth.jwt_handler import TokenClaims, TokenService
from blogapi.auth.passwords import Argon2PasswordHasher
from blogapi.auth.service import AuthService
from blogapi.database import get_db_session
from blogapi.errors import Forbidden, InvalidToken, Unauthenticated
from blogapi.models import UserRole
from blogapi.repositories.users import UserRepository

logger = logging.getLogger(__name__)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> Argon2PasswordHasher:
    return request.app.state.password_hasher


def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
    hasher: Argon2PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(UserRepository(session), hasher, tokens)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Pull the token out of an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


async def get_current_claims(
    authorization: str | None = Header(None, alias="Authorization"),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """Resolve the caller's identity from the bearer token.

    Raises:
        Unauthenticated: If no bearer token was sent.
        InvalidToken: If the token fails validation.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise Unauthenticated("Missing or invalid Authorization header")

    try:
        return tokens.validate(token)
    except InvalidToken as e:
        logger.warning(f"Rejected bearer token: {e.message}")
        raise


async def require_admin(
    claims: TokenClaims = Depends(get_current_claims),
) -> TokenClaims:
    """Gate for every mutating endpoint."""
    if claims.role != UserRole.ADMIN:
        raise Forbidden("Administrator role required")
    return claims
