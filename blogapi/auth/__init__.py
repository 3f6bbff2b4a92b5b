"""Auth module - password hashing, JWT issuance and the login flow."""

from blogapi.auth.dependencies import get_current_claims, require_admin
from blogapi.auth.jwt_handler import TokenClaims, TokenService
from blogapi.auth.passwords import Argon2PasswordHasher
from blogapi.auth.service import AuthService

__all__ = [
    "Argon2PasswordHasher",
    "AuthService",
    "TokenClaims",
    "TokenService",
    "get_current_claims",
    "require_admin",
]
