"""Login and registration flows."""
from __future__ import annotations

import logging

from messagely.core.errors import InvalidCredentials, UsernameTaken
from messagely.core.security import PasswordHasher, TokenService
from messagely.repositories import UserRepository
from messagely.schemas.user import RegisterRequest

logger = logging.getLogger(__name__)


class AuthService:
    """Verify credentials and hand out bearer tokens."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def authenticate(self, username: str, password: str) -> str:
        """Return a fresh token for valid credentials.

        Unknown usernames and wrong passwords fail identically, including the
        bcrypt work spent on them.

        Raises:
            InvalidCredentials: If the username/password pair is not valid.
        """
        user = self.users.get_by_username(username)
        if user is None:
            self.hasher.verify_dummy(password)
            logger.info("Failed login attempt")
            raise InvalidCredentials()
        if not self.hasher.verify(password, user.password):
            logger.info("Failed login attempt")
            raise InvalidCredentials()

        self.users.update_last_login(username)
        logger.info("User %s logged in", username)
        return self.tokens.issue(username)

    def register(self, payload: RegisterRequest) -> str:
        """Create an account and return a token for it.

        Raises:
            UsernameTaken: If the username already exists.
        """
        if self.users.exists(payload.username):
            raise UsernameTaken()

        user = self.users.create(
            username=payload.username,
            password_hash=self.hasher.hash(payload.password),
            first_name=payload.first_name,
            last_name=payload.last_name,
            phone=payload.phone,
        )
        if user is None:
            raise UsernameTaken()

        logger.info("Registered user %s", user.username)
        return self.tokens.issue(user.username)
