"""User and authentication Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from messagely.core.security import BCRYPT_MAX_PASSWORD_BYTES


def _check_password_length(value: str) -> str:
    if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
    return value


class LoginRequest(BaseModel):
    """Schema for login submissions.

    No length rules here: credentials that could never match fail the same
    way as a wrong password.
    """

    username: str
    password: str


class RegisterRequest(BaseModel):
    """Schema for new account registration."""

    username: str = Field(..., min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$")
    password: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=32)

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        """Reject passwords longer than bcrypt can hash."""
        return _check_password_length(v)


class TokenResponse(BaseModel):
    """Bearer token returned after login or registration."""

    token: str = Field(..., description="Signed JWT bearer token")


class UserSummary(BaseModel):
    """Public profile fields shown alongside messages and in the directory."""

    username: str
    first_name: str
    last_name: str
    phone: str

    model_config = ConfigDict(from_attributes=True)


class UserDetail(UserSummary):
    """Full profile of a user, without the password hash."""

    join_at: datetime
    last_login_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class UserListResponse(BaseModel):
    users: list[UserSummary]


class UserDetailResponse(BaseModel):
    user: UserDetail
