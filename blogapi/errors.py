"""Domain errors raised by services and mapped to HTTP responses.

Every error carries the status code it is surfaced with; the single
exception handler registered in `blogapi.main` turns them into
`{"error": ..., "detail": ...}` bodies.
"""

from __future__ import annotations

from typing import Any


class BlogAPIError(Exception):
    """Base class for all expected failures."""

    status_code: int = 400

    def __init__(self, message: str, detail: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class InvalidInput(BlogAPIError):
    """A required field is missing or malformed."""

    status_code = 400


class Unauthenticated(BlogAPIError):
    """No usable credentials were presented."""

    status_code = 401


class InvalidToken(Unauthenticated):
    """Bearer token has a bad signature, bad structure, or has expired."""


class InvalidCredentials(BlogAPIError):
    """Username/password pair does not match a user."""

    status_code = 401


class Forbidden(BlogAPIError):
    status_code = 403


class NotFound(BlogAPIError):
    status_code = 404


class DuplicateUsername(BlogAPIError):
    status_code = 409


class SlugConflict(BlogAPIError):
    """The store rejected a slug that the service believed was free.

    Safe to retry: a new attempt gets a fresh timestamp suffix.
    """

    status_code = 409


class StorageUnavailable(BlogAPIError):
    """Uploaded bytes could not be written."""

    status_code = 503
