"""Data access helpers for working with users."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from messagely.db.time import utcnow
from messagely.models.user import User

__all__ = ["UserRepository"]

logger = logging.getLogger(__name__)


class UserRepository:
    """Thin wrapper around database access for user entities.

    Lookups return ``None`` for a missing user instead of raising.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_username(self, username: str) -> User | None:
        """Return a user by username."""
        return self.session.get(User, username)

    def exists(self, username: str) -> bool:
        stmt = select(User.username).where(User.username == username)
        return self.session.execute(stmt).first() is not None

    def list_all(self) -> Sequence[User]:
        """Return every user ordered by username."""
        return self.session.execute(select(User).order_by(User.username)).scalars().all()

    def create(
        self,
        *,
        username: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        phone: str,
    ) -> User | None:
        """Insert a new user and return it, or ``None`` if the username is taken."""
        now = utcnow()
        user = User(
            username=username,
            password=password_hash,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            join_at=now,
            last_login_at=now,
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            logger.debug("Insert for existing username %s rejected by the database", username)
            return None
        self.session.refresh(user)
        return user

    def update_last_login(self, username: str, when: datetime | None = None) -> bool:
        """Stamp ``last_login_at`` for ``username``; False if the user is missing."""
        result = self.session.execute(
            update(User)
            .where(User.username == username)
            .values(last_login_at=when or utcnow())
            .execution_options(synchronize_session=False)
        )
        self.session.commit()
        return bool(result.rowcount)
