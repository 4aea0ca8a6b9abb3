"""SQLAlchemy model for registered users."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from messagely.db.session import Base
from messagely.db.time import UTCDateTime, utcnow


class User(Base):
    """Registered identity keyed by an immutable username."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(Text, primary_key=True)
    # bcrypt hash; never serialized outward.
    password: Mapped[str] = mapped_column(Text, nullable=False)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(Text, nullable=False)
    join_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow, nullable=False)
    last_login_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    def __repr__(self) -> str:
        return f"<User {self.username}>"
