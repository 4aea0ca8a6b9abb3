"""Application settings and configuration.

This module defines all configuration options for the Messagely application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BCRYPT_MIN_ROUNDS = 4
BCRYPT_MAX_ROUNDS = 31


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    A single instance is created at import time and treated as read-only.
    The signing key and hashing cost are handed to the token service and
    password hasher through their constructors.
    """

    # Application metadata
    app_name: str = Field(default="Messagely", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        gt=0,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )
    bcrypt_work_factor: int = Field(
        default=12,
        ge=BCRYPT_MIN_ROUNDS,
        le=BCRYPT_MAX_ROUNDS,
        alias="BCRYPT_WORK_FACTOR",
    )

    # Database configuration
    database_url: str = Field(default="sqlite:///./messagely.db", alias="DATABASE_URL")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        frozen=True,
        extra="ignore",
    )


settings = Settings()  # type: ignore[call-arg]
