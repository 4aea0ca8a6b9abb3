# src/messagely/api/endpoints/messages.py
"""Message endpoints for the Messagely API."""

from __future__ import annotations

from fastapi import APIRouter, status

from messagely.api.dependencies import CurrentUsernameDep, VisibilityPolicyDep
from messagely.schemas.message import (
    MessageCreate,
    MessageCreated,
    MessageCreatedResponse,
    MessageDetail,
    MessageDetailResponse,
    MessageReadResponse,
    MessageReadState,
)

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/{message_id}", response_model=MessageDetailResponse)
def get_message(
    message_id: int,
    current_username: CurrentUsernameDep,
    policy: VisibilityPolicyDep,
) -> MessageDetailResponse:
    """Return a message to its sender or recipient."""
    message = policy.get_message(message_id, current_username)
    return MessageDetailResponse(message=MessageDetail.model_validate(message))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MessageCreatedResponse)
def send_message(
    payload: MessageCreate,
    current_username: CurrentUsernameDep,
    policy: VisibilityPolicyDep,
) -> MessageCreatedResponse:
    """Send a message from the current user to ``to_username``."""
    message = policy.send(current_username, payload.to_username, payload.body)
    return MessageCreatedResponse(message=MessageCreated.model_validate(message))


@router.post("/{message_id}/read", response_model=MessageReadResponse)
def mark_message_read(
    message_id: int,
    current_username: CurrentUsernameDep,
    policy: VisibilityPolicyDep,
) -> MessageReadResponse:
    """Mark a message read. Only its recipient may do this."""
    message = policy.mark_read(message_id, current_username)
    return MessageReadResponse(message=MessageReadState.model_validate(message))
