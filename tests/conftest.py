# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("PYTEST_RUNNING", "true")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-for-blog-engine"
os.environ["BCRYPT_COST"] = "4"
os.environ["ENVIRONMENT"] = "testing"

from blog_engine.core.security import PasswordHasher, TokenCodec, get_token_codec
from blog_engine.db.session import Base, build_engine, create_tables, drop_tables
from blog_engine.db.session import get_db as app_get_session
from blog_engine.main import app as fastapi_app
from blog_engine.models import Post, Role, User
from blog_engine.repositories import PostRepository, UserRepository

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "secret1"

_USER_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    try:
        yield engine
    finally:
        drop_tables(engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Stores commit, so every test starts from empty tables instead of a rollback.
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
def hasher() -> PasswordHasher:
    return PasswordHasher(cost=4)


@pytest.fixture(scope="session")
def codec() -> TokenCodec:
    return get_token_codec()


@pytest.fixture()
def make_user(db_session: Session, hasher: PasswordHasher) -> Callable[..., User]:
    """Return a factory that persists users with the shared test password."""

    def _make_user(username: str | None = None, role: Role = Role.USER, password: str = TEST_PASSWORD) -> User:
        n = next(_USER_COUNTER)
        name = username or f"user{n}"
        return UserRepository(db_session).create(name, f"{name}@example.com", hasher.hash(password), role=role)

    return _make_user


@pytest.fixture()
def make_headers(codec: TokenCodec) -> Callable[[User], dict[str, str]]:
    """Return a factory for bearer headers of a persisted user."""

    def _make_headers(user: User) -> dict[str, str]:
        token = codec.issue_token(user.id, user.username, user.role)
        return {"Authorization": f"Bearer {token}"}

    return _make_headers


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary test user."""
    return make_user("author")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second, unrelated user."""
    return make_user("reader")


@pytest.fixture()
def admin_user(make_user: Callable[..., User]) -> User:
    """Create and return an administrator."""
    return make_user("admin", role=Role.ADMIN)


@pytest.fixture()
def auth_token(test_user: User, make_headers: Callable[[User], dict[str, str]]) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return make_headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User, make_headers: Callable[[User], dict[str, str]]) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return make_headers(other_user)


@pytest.fixture()
def admin_token(admin_user: User, make_headers: Callable[[User], dict[str, str]]) -> dict[str, str]:
    """Return authorization headers for the administrator."""
    return make_headers(admin_user)


@pytest.fixture()
def make_post(db_session: Session, test_user: User) -> Callable[..., Post]:
    """Return a factory for posts authored by `test_user` unless told otherwise."""

    def _make_post(
        title: str = "Hello world",
        content: str = "First post body",
        category: str = "general",
        is_published: bool = True,
        author: User | None = None,
    ) -> Post:
        fields = {
            "title": title,
            "content": content,
            "category": category,
            "is_published": is_published,
        }
        return PostRepository(db_session).create(fields, author_id=(author or test_user).id)

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post]) -> Post:
    """Create a published post by the primary test user."""
    return make_post()
