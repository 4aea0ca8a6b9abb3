"""Data access helpers for working with messages."""
from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from messagely.db.time import utcnow
from messagely.models.message import Message

__all__ = ["MessageRepository"]

# Largest value a signed 64-bit INTEGER column can hold.
MAX_MESSAGE_ID = 2**63 - 1


def _valid_id(message_id: int) -> bool:
    return 0 < message_id <= MAX_MESSAGE_ID


class MessageRepository:
    """Thin wrapper around database access for message entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_id(self, message_id: int, *, refresh: bool = False) -> Message | None:
        """Return a message by identifier, or ``None``.

        ``refresh`` bypasses the session identity map so a value written by a
        concurrent request is observed.
        """
        if not _valid_id(message_id):
            return None
        stmt = select(Message).where(Message.id == message_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        return self.session.execute(stmt).unique().scalars().first()

    def create(self, *, from_username: str, to_username: str, body: str) -> Message:
        """Insert a new message and return the persisted ORM instance."""
        message = Message(
            from_username=from_username,
            to_username=to_username,
            body=body,
            sent_at=utcnow(),
        )
        self.session.add(message)
        self.session.commit()
        self.session.refresh(message)
        return message

    def set_read(self, message_id: int, to_username: str, when: datetime | None = None) -> bool:
        """Mark a message read in one conditional UPDATE.

        The row changes only if it belongs to ``to_username`` and is still
        unread. Returns True if this call performed the transition.
        """
        if not _valid_id(message_id):
            return False
        result = self.session.execute(
            update(Message)
            .where(
                Message.id == message_id,
                Message.to_username == to_username,
                Message.read_at.is_(None),
            )
            .values(read_at=when or utcnow())
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        return result.rowcount == 1

    def list_to(self, username: str) -> Sequence[Message]:
        """Return messages addressed to ``username``, oldest first."""
        stmt = select(Message).where(Message.to_username == username).order_by(Message.sent_at, Message.id)
        return self.session.execute(stmt).unique().scalars().all()

    def list_from(self, username: str) -> Sequence[Message]:
        """Return messages sent by ``username``, oldest first."""
        stmt = select(Message).where(Message.from_username == username).order_by(Message.sent_at, Message.id)
        return self.session.execute(stmt).unique().scalars().all()
