"""Pydantic schemas for the auth API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AuthRequest(BaseModel):
    """Request body for register and login."""

    username: str = Field(..., max_length=100, examples=["admin"])
    password: str = Field(..., max_length=256)


class TokenResponse(BaseModel):
    """Bearer token returned on register or login."""

    token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")


class MeResponse(BaseModel):
    """Identity carried by the caller's token."""

    username: str
    role: str
