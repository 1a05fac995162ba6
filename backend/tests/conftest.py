"""Shared pytest fixtures configured to use SQLite in-memory for tests."""

import logging
import os
from uuid import uuid4

# cheap bcrypt for the test run; must be set before settings are loaded
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.notekeeper.core.models.base import BaseModel
from src.notekeeper.core.models.note import Note
from src.notekeeper.core.models.types import Role, Visibility
from src.notekeeper.core.models.user import User
from src.notekeeper.database import get_db_session
from src.notekeeper.main import app
from src.notekeeper.security.jwt import build_access_claims, create_access_token
from src.notekeeper.security.password import hash_password

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "TestPassword123!"


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DB_URL,
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )

    # SQLite only enforces foreign keys (and the CASCADE on notes.user_id) when asked
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_factory):
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


@pytest.fixture
def override_get_db(session_factory):
    """Override the get_db_session dependency; one session per request."""

    async def _override_get_db():
        async with session_factory() as session:
            yield session

    return _override_get_db


@pytest.fixture
def test_app(override_get_db):
    """App with the store dependency pointed at the test database."""
    app.dependency_overrides[get_db_session] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    """Create test client (for routes that never reach the database)."""
    return TestClient(test_app)


@pytest.fixture
async def async_client(test_app):
    """Async client running in the test's event loop."""
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as ac:
        yield ac


def make_user_data(**overrides):
    data = {
        "name": "Test User",
        "email": f"user_{uuid4().hex[:8]}@example.com",
        "password": TEST_PASSWORD,
        "role": "user",
    }
    data.update(overrides)
    return data


@pytest.fixture
def test_user_data():
    """Sample registration payload."""
    return make_user_data()


async def _create_user(session, email: str, name: str = "Test User", role: Role = Role.USER) -> User:
    user = User(name=name, email=email, password_hash=hash_password(TEST_PASSWORD), role=role)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def test_user(test_session):
    """A stored user whose password is TEST_PASSWORD."""
    return await _create_user(test_session, "owner@example.com", name="Owner")


@pytest.fixture
async def other_user(test_session):
    return await _create_user(test_session, "other@example.com", name="Other")


def bearer_for(user: User) -> dict:
    token = create_access_token(build_access_claims(user))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_user):
    """Authorization header with a valid access token for test_user."""
    return bearer_for(test_user)


@pytest.fixture
def other_auth_headers(other_user):
    return bearer_for(other_user)


@pytest.fixture
def create_note(test_session):
    """Factory storing a note directly, bypassing the API."""

    async def _create(owner: User, visibility: Visibility = Visibility.PRIVATE, **fields) -> Note:
        note = Note(
            title=fields.get("title", "Test Note"),
            description=fields.get("description", "This is a test note"),
            visibility=visibility,
            tags=fields.get("tags", ["test", "example"]),
            user_id=owner.id,
        )
        test_session.add(note)
        await test_session.commit()
        await test_session.refresh(note)
        return note

    return _create


@pytest.fixture
def auth_headers_for():
    """Build an Authorization header for any user."""
    return bearer_for


@pytest.fixture
def user_payload():
    """Factory for registration payloads with a unique email."""
    return make_user_data
