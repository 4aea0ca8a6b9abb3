"""Password hashing and bearer token primitives.

Both services are plain objects configured through their constructors; the
application builds one of each from ``settings`` and shares them read-only.
"""
from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from functools import cached_property, lru_cache

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from messagely.core.errors import InvalidToken
from messagely.core.settings import settings

logger = logging.getLogger(__name__)

# bcrypt ignores everything past this many bytes of input.
BCRYPT_MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted bcrypt hashing with a configurable work factor."""

    def __init__(self, work_factor: int) -> None:
        self.work_factor = work_factor

    def hash(self, plaintext: str) -> str:
        """Return a salted bcrypt hash of ``plaintext``.

        Raises:
            ValueError: If the password exceeds bcrypt's 72-byte input limit.
        """
        password = plaintext.encode("utf-8")
        if len(password) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(
                f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes"
            )
        salt = bcrypt.gensalt(rounds=self.work_factor)
        return bcrypt.hashpw(password, salt).decode("ascii")

    def verify(self, plaintext: str, stored_hash: str | None) -> bool:
        """Return True if ``plaintext`` matches ``stored_hash``.

        A missing or malformed hash is a mismatch, never an error.
        """
        if not stored_hash:
            return False
        password = plaintext.encode("utf-8")
        if len(password) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(password, stored_hash.encode("ascii"))
        except (ValueError, TypeError):
            return False

    @cached_property
    def _dummy_hash(self) -> str:
        return self.hash("messagely-dummy-password")

    def verify_dummy(self, plaintext: str) -> bool:
        """Spend the same effort as a real check when there is no user to check.

        Always returns False.
        """
        self.verify(plaintext, self._dummy_hash)
        return False


class TokenService:
    """Issue and verify signed, stateless JWT bearer tokens."""

    def __init__(self, secret_key: str, algorithm: str, expire_minutes: int) -> None:
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, username: str, *, now: datetime | None = None) -> str:
        """Return a token asserting ``username`` with issued-at and expiry claims."""
        issued_at = now or datetime.now(UTC)
        claims: dict[str, object] = {
            "sub": username,
            "iat": issued_at,
            "exp": issued_at + timedelta(minutes=self.expire_minutes),
        }
        encoded: str = jwt.encode(claims, self._secret_key, algorithm=self.algorithm)
        return encoded

    def verify(self, token: str) -> str:
        """Return the username asserted by ``token``.

        Raises:
            InvalidToken: If the token is malformed, tampered with, signed with
                another key or algorithm, expired, or has no subject.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_iat": True, "require_sub": True},
            )
        except ExpiredSignatureError as err:
            logger.info("Rejected expired token")
            raise InvalidToken("Token has expired") from err
        except JWTError as err:
            logger.info("Rejected invalid token: %s", err)
            raise InvalidToken() from err

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise InvalidToken()
        return subject


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    """Return the process-wide password hasher."""
    return PasswordHasher(work_factor=settings.bcrypt_work_factor)


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    """Return the process-wide token service."""
    return TokenService(
        secret_key=settings.secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )


__all__ = [
    "BCRYPT_MAX_PASSWORD_BYTES",
    "PasswordHasher",
    "TokenService",
    "get_password_hasher",
    "get_token_service",
]
