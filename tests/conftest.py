# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from messagely.core.security import (
    PasswordHasher,
    TokenService,
    get_password_hasher,
    get_token_service,
)
from messagely.core.settings import Settings, settings
from messagely.db.session import Base
from messagely.db.session import get_db as app_get_session
from messagely.main import app as fastapi_app
from messagely.models import Message, User
from messagely.repositories import MessageRepository, UserRepository

TEST_DB_URL = "sqlite://"
DEFAULT_PASSWORD = "correct horse battery staple"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Ensure each test sees a clean database even though repositories commit.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide the Settings instance the application was built with."""
    return settings


@pytest.fixture(scope="session")
def hasher() -> PasswordHasher:
    return get_password_hasher()


@pytest.fixture(scope="session")
def token_service() -> TokenService:
    return get_token_service()


@pytest.fixture()
def user_repo(db_session: Session) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture()
def message_repo(db_session: Session) -> MessageRepository:
    return MessageRepository(db_session)


@pytest.fixture()
def make_user(user_repo: UserRepository, hasher: PasswordHasher) -> Callable[..., User]:
    """Return a factory that persists a user with a known password."""

    def _make_user(username: str, password: str = DEFAULT_PASSWORD) -> User:
        user = user_repo.create(
            username=username,
            password_hash=hasher.hash(password),
            first_name=username.capitalize(),
            last_name="Tester",
            phone="555-0100",
        )
        assert user is not None
        return user

    return _make_user


@pytest.fixture()
def alice(make_user: Callable[..., User]) -> User:
    return make_user("alice")


@pytest.fixture()
def bob(make_user: Callable[..., User]) -> User:
    return make_user("bob")


@pytest.fixture()
def carol(make_user: Callable[..., User]) -> User:
    return make_user("carol")


def _auth_header(token_service: TokenService, user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_service.issue(user.username)}"}


@pytest.fixture()
def alice_auth(token_service: TokenService, alice: User) -> dict[str, str]:
    """Return authorization headers for alice."""
    return _auth_header(token_service, alice)


@pytest.fixture()
def bob_auth(token_service: TokenService, bob: User) -> dict[str, str]:
    """Return authorization headers for bob."""
    return _auth_header(token_service, bob)


@pytest.fixture()
def carol_auth(token_service: TokenService, carol: User) -> dict[str, str]:
    """Return authorization headers for carol."""
    return _auth_header(token_service, carol)


@pytest.fixture()
def message(message_repo: MessageRepository, alice: User, bob: User) -> Message:
    """A message from alice to bob."""
    return message_repo.create(from_username=alice.username, to_username=bob.username, body="hi bob")
