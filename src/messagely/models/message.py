"""Models describing messages exchanged between users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from messagely.db.session import Base
from messagely.db.time import UTCDateTime, utcnow

from .user import User


class Message(Base):
    """Text message sent from one user to another.

    Immutable once sent, apart from ``read_at`` which moves from null to a
    timestamp exactly once.
    """

    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    from_username: Mapped[str] = mapped_column(Text, ForeignKey("users.username"), nullable=False, index=True)
    to_username: Mapped[str] = mapped_column(Text, ForeignKey("users.username"), nullable=False, index=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    sent_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow, nullable=False)
    read_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    from_user: Mapped[User] = relationship("User", foreign_keys=[from_username], lazy="joined")
    to_user: Mapped[User] = relationship("User", foreign_keys=[to_username], lazy="joined")
