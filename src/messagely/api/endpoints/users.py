# src/messagely/api/endpoints/users.py
"""User directory and per-user message thread endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from messagely.api.dependencies import CurrentUsernameDep, SessionDep, VisibilityPolicyDep
from messagely.core.errors import NotFound, Unauthorized
from messagely.repositories import UserRepository
from messagely.schemas.message import InboxMessage, InboxResponse, OutboxMessage, OutboxResponse
from messagely.schemas.user import (
    UserDetail,
    UserDetailResponse,
    UserListResponse,
    UserSummary,
)

router = APIRouter(prefix="/users", tags=["users"])


def _ensure_self(username: str, current_username: str) -> None:
    if username != current_username:
        raise Unauthorized()


@router.get("", response_model=UserListResponse)
def list_users(current_username: CurrentUsernameDep, db: SessionDep) -> UserListResponse:
    """List every registered user."""
    users = UserRepository(db).list_all()
    return UserListResponse(users=[UserSummary.model_validate(user) for user in users])


@router.get("/{username}", response_model=UserDetailResponse)
def get_user(
    username: str,
    current_username: CurrentUsernameDep,
    db: SessionDep,
) -> UserDetailResponse:
    """Return the caller's own profile."""
    _ensure_self(username, current_username)
    user = UserRepository(db).get_by_username(username)
    if user is None:
        raise NotFound("User not found")
    return UserDetailResponse(user=UserDetail.model_validate(user))


@router.get("/{username}/to", response_model=InboxResponse)
def get_messages_to(
    username: str,
    current_username: CurrentUsernameDep,
    policy: VisibilityPolicyDep,
) -> InboxResponse:
    """Return messages addressed to the caller."""
    _ensure_self(username, current_username)
    messages = policy.inbox(username)
    return InboxResponse(messages=[InboxMessage.model_validate(m) for m in messages])


@router.get("/{username}/from", response_model=OutboxResponse)
def get_messages_from(
    username: str,
    current_username: CurrentUsernameDep,
    policy: VisibilityPolicyDep,
) -> OutboxResponse:
    """Return messages the caller has sent."""
    _ensure_self(username, current_username)
    messages = policy.outbox(username)
    return OutboxResponse(messages=[OutboxMessage.model_validate(m) for m in messages])
