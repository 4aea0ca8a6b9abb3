"""Message-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .user import UserSummary


class MessageCreate(BaseModel):
    """Schema for sending a new message."""

    to_username: str = Field(..., min_length=1, description="Recipient username")
    body: str = Field(..., min_length=1, max_length=10_000, description="Message text")


class MessageCreated(BaseModel):
    id: int
    from_username: str
    to_username: str
    body: str
    sent_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageDetail(BaseModel):
    """A message with both participants expanded."""

    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None
    from_user: UserSummary
    to_user: UserSummary

    model_config = ConfigDict(from_attributes=True)


class MessageReadState(BaseModel):
    id: int
    read_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class InboxMessage(BaseModel):
    """A received message, showing who sent it."""

    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None
    from_user: UserSummary

    model_config = ConfigDict(from_attributes=True)


class OutboxMessage(BaseModel):
    """A sent message, showing who it went to."""

    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None
    to_user: UserSummary

    model_config = ConfigDict(from_attributes=True)


class MessageCreatedResponse(BaseModel):
    message: MessageCreated


class MessageDetailResponse(BaseModel):
    message: MessageDetail


class MessageReadResponse(BaseModel):
    message: MessageReadState


class InboxResponse(BaseModel):
    messages: list[InboxMessage]


class OutboxResponse(BaseModel):
    messages: list[OutboxMessage]
