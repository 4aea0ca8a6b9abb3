"""Error kinds surfaced by the authentication and messaging layers.

Each error carries the HTTP status it maps to; the application registers a
single exception handler that renders them as ``{"detail": ...}``.
"""

from __future__ import annotations

from fastapi import status


class MessagelyError(Exception):
    """Base class for errors that translate directly into an HTTP response."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    detail: str = "Bad request"
    headers: dict[str, str] | None = None

    def __init__(self, detail: str | None = None, *, status_code: int | None = None) -> None:
        if detail is not None:
            self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.detail)


class InvalidCredentials(MessagelyError):
    """Login failed. The detail never says whether the username exists."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid credentials"


class UsernameTaken(MessagelyError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Username already taken"


class NotFound(MessagelyError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class Unauthorized(MessagelyError):
    """The caller is authenticated but not allowed to touch the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    detail = "Unauthorized"


class InvalidToken(MessagelyError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Could not validate credentials"
    headers = {"WWW-Authenticate": "Bearer"}


__all__ = [
    "MessagelyError",
    "InvalidCredentials",
    "UsernameTaken",
    "NotFound",
    "Unauthorized",
    "InvalidToken",
]
