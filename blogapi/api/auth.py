"""Auth API endpoints.

Endpoints:
    POST /api/auth/register - Create an admin user, return a token
    POST /api/auth/login    - Verify credentials, return a token
    GET  /api/auth/me       - Identity carried by the caller's token
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from blogapi.auth.dependencies import get_auth_service, get_current_claims
from blogapi.auth.jwt_handler import TokenClaims
from blogapi.auth.schemas import AuthRequest, MeResponse, TokenResponse
from blogapi.auth.service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse)
async def register(
    request: AuthRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Register a new admin user.

    Fails with 409 if the username is taken.
    """
    token = await service.register(request.username, request.password)
    return TokenResponse(token=token, expires_in=service.tokens.expires_in)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: AuthRequest,
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange username and password for a bearer token."""
    token = await service.login(request.username, request.password)
    return TokenResponse(token=token, expires_in=service.tokens.expires_in)


@router.get("/me", response_model=MeResponse)
async def me(claims: TokenClaims = Depends(get_current_claims)) -> MeResponse:
    return MeResponse(username=claims.subject, role=claims.role.value)
