"""Tests for the token service - issuance, validation, expiry, tampering."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt as pyjwt
import pytest

from blogapi.auth.jwt_handler import TokenService
from blogapi.config import Settings
from blogapi.errors import InvalidToken, Unauthenticated
from blogapi.models import UserRole

SECRET = "test-secret-key-for-testing"


def _flip_char(segment: str, index: int) -> str:
    replacement = "A" if segment[index] != "A" else "B"
    return segment[:index] + replacement + segment[index + 1:]


@pytest.mark.fast
class TestIssueAndValidate:
    def test_round_trip(self, token_service):
        token = token_service.issue("admin", UserRole.ADMIN)
        assert isinstance(token, str)

        claims = token_service.validate(token)
        assert claims.subject == "admin"
        assert claims.role == UserRole.ADMIN
        assert claims.expires_at > claims.issued_at

    def test_expiry_is_configured_lifetime(self, token_service):
        claims = token_service.validate(token_service.issue("admin", UserRole.ADMIN))
        assert claims.expires_at - claims.issued_at == timedelta(minutes=15)

    def test_expires_in_seconds(self, token_service):
        assert token_service.expires_in == 15 * 60

    def test_from_settings(self):
        settings = Settings(JWT_SECRET_KEY="from-settings", JWT_ACCESS_EXPIRE_MINUTES=5)
        service = TokenService.from_settings(settings)
        assert service.expires_in == 300
        assert service.validate(service.issue("a", UserRole.ADMIN)).subject == "a"

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            TokenService(secret="", expire_minutes=5)


@pytest.mark.fast
class TestRejection:
    def test_expired_token(self):
        service = TokenService(secret=SECRET, expire_minutes=-1)
        token = service.issue("admin", UserRole.ADMIN)

        with pytest.raises(InvalidToken, match="expired"):
            service.validate(token)

    def test_malformed_token(self, token_service):
        with pytest.raises(InvalidToken, match="Invalid"):
            token_service.validate("not-a-jwt")

    def test_wrong_secret(self, token_service):
        other = TokenService(secret="another-secret", expire_minutes=15)
        with pytest.raises(InvalidToken):
            token_service.validate(other.issue("admin", UserRole.ADMIN))

    def test_altered_signature(self, token_service):
        header, payload, signature = token_service.issue("admin", UserRole.ADMIN).split(".")
        tampered = ".".join([header, payload, _flip_char(signature, len(signature) // 2)])

        with pytest.raises(InvalidToken):
            token_service.validate(tampered)

    def test_altered_payload(self, token_service):
        header, payload, signature = token_service.issue("admin", UserRole.ADMIN).split(".")
        tampered = ".".join([header, _flip_char(payload, len(payload) // 2), signature])

        with pytest.raises(InvalidToken):
            token_service.validate(tampered)

    def test_wrong_type_claim(self, token_service):
        now = datetime.now(timezone.utc)
        payload = {
            "sub": "admin",
            "role": "ADMIN",
            "iat": now,
            "exp": now + timedelta(minutes=15),
            "type": "refresh",
        }
        token = pyjwt.encode(payload, SECRET, algorithm="HS256")

        with pytest.raises(InvalidToken, match="not an access token"):
            token_service.validate(token)

    def test_unknown_role(self, token_service):
        now = datetime.now(timezone.utc)
        payload = {
            "sub": "admin",
            "role": "SUPERUSER",
            "iat": now,
            "exp": now + timedelta(minutes=15),
            "type": "access",
        }
        token = pyjwt.encode(payload, SECRET, algorithm="HS256")

        with pytest.raises(InvalidToken, match="role"):
            token_service.validate(token)

    def test_missing_expiry(self, token_service):
        payload = {"sub": "admin", "role": "ADMIN", "iat": datetime.now(timezone.utc), "type": "access"}
        token = pyjwt.encode(payload, SECRET, algorithm="HS256")

        with pytest.raises(InvalidToken):
            token_service.validate(token)

    def test_invalid_token_is_unauthenticated(self):
        assert issubclass(InvalidToken, Unauthenticated)
        assert InvalidToken("x").status_code == 401
