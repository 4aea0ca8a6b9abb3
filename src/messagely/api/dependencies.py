"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from messagely.core.errors import InvalidToken
from messagely.core.security import (
    PasswordHasher,
    TokenService,
    get_password_hasher,
    get_token_service,
)
from messagely.db.session import get_db
from messagely.repositories import MessageRepository, UserRepository
from messagely.services.auth import AuthService
from messagely.services.visibility import MessageVisibilityPolicy

# The guard reports a missing header itself so every failure is a 401.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
PasswordHasherDep = Annotated[PasswordHasher, Depends(get_password_hasher)]
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]


def get_current_username(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    tokens: TokenServiceDep,
) -> str:
    """Resolve the caller's username from the bearer token.

    Only the signature and expiry are checked; the database is not consulted.

    Raises:
        InvalidToken: If the header is missing, not a bearer token, or the
            token does not verify.
    """
    if credentials is None or not credentials.credentials:
        raise InvalidToken("Not authenticated")
    return tokens.verify(credentials.credentials)


# Type alias for current user dependency
CurrentUsernameDep = Annotated[str, Depends(get_current_username)]


def get_auth_service(
    db: SessionDep,
    hasher: PasswordHasherDep,
    tokens: TokenServiceDep,
) -> AuthService:
    return AuthService(UserRepository(db), hasher, tokens)


def get_visibility_policy(db: SessionDep) -> MessageVisibilityPolicy:
    return MessageVisibilityPolicy(MessageRepository(db), UserRepository(db))


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
VisibilityPolicyDep = Annotated[MessageVisibilityPolicy, Depends(get_visibility_policy)]
