"""HTTP API for the Messagely service."""

from .endpoints import auth_router, messages_router, users_router

__all__ = ["auth_router", "messages_router", "users_router"]
