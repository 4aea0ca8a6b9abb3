"""Who may see a message, and who may mark it read.

Any participant (sender or recipient) may read a message. Only the recipient
may mark it read, and the ``unread -> read`` transition happens at most once.
"""
from __future__ import annotations

import logging

from fastapi import status

from messagely.core.errors import NotFound, Unauthorized
from messagely.models import Message
from messagely.repositories import MessageRepository, UserRepository

logger = logging.getLogger(__name__)

MARK_READ_DENIED = "Unauthorized to update message"


def can_read(message: Message, username: str) -> bool:
    """True iff ``username`` sent or received ``message``."""
    return username in (message.from_username, message.to_username)


def can_mark_read(message: Message, username: str) -> bool:
    """True iff ``username`` is the recipient of ``message``.

    The sender can read their own message but never change its read state.
    """
    return username == message.to_username


class MessageVisibilityPolicy:
    """Apply the visibility rules on top of the message store."""

    def __init__(self, messages: MessageRepository, users: UserRepository) -> None:
        self.messages = messages
        self.users = users

    def get_message(self, message_id: int, username: str) -> Message:
        """Return a message the caller participates in.

        Raises:
            NotFound: If no such message exists.
            Unauthorized: If the caller is neither sender nor recipient.
        """
        message = self.messages.get_by_id(message_id)
        if message is None:
            raise NotFound("Message not found")
        if not can_read(message, username):
            logger.warning("User %s denied read access to message %s", username, message_id)
            raise Unauthorized("Unauthorized to view message")
        return message

    def send(self, from_username: str, to_username: str, body: str) -> Message:
        """Create a message after checking the recipient exists.

        Raises:
            NotFound: If the recipient is not a registered user.
        """
        if not self.users.exists(to_username):
            raise NotFound("Recipient user not found")
        message = self.messages.create(
            from_username=from_username,
            to_username=to_username,
            body=body,
        )
        logger.info("Message %s sent from %s to %s", message.id, from_username, to_username)
        return message

    def mark_read(self, message_id: int, username: str) -> Message:
        """Mark a message read on behalf of its recipient.

        The authorization predicate is repeated inside the conditional update,
        so a racing request can neither skip the check nor move ``read_at``
        twice. Marking an already-read message returns it unchanged.

        Raises:
            Unauthorized: If the message is missing or the caller is not its
                recipient. Both cases share one response and leave the row
                untouched.
        """
        message = self.messages.get_by_id(message_id)
        if message is None or not can_mark_read(message, username):
            logger.warning("User %s denied mark-read on message %s", username, message_id)
            raise Unauthorized(MARK_READ_DENIED, status_code=status.HTTP_400_BAD_REQUEST)

        if self.messages.set_read(message_id, username):
            logger.info("Message %s marked read by %s", message_id, username)

        refreshed = self.messages.get_by_id(message_id, refresh=True)
        if refreshed is None:  # pragma: no cover - messages are never deleted
            raise Unauthorized(MARK_READ_DENIED, status_code=status.HTTP_400_BAD_REQUEST)
        return refreshed

    def inbox(self, username: str) -> list[Message]:
        return list(self.messages.list_to(username))

    def outbox(self, username: str) -> list[Message]:
        return list(self.messages.list_from(username))
