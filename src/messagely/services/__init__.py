"""Business logic services for the Messagely application."""

from .auth import AuthService
from .visibility import MessageVisibilityPolicy, can_mark_read, can_read

__all__ = [
    "AuthService",
    "MessageVisibilityPolicy",
    "can_mark_read",
    "can_read",
]
