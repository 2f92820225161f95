"""Shared pytest fixtures: RSA test keys, SQLite in-memory database and a fakeredis blacklist."""

import base64
import logging
import os
import tempfile

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa


def generate_key_pair() -> tuple[str, str]:
    """Return a base64 encoded (private, public) PEM pair."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return base64.b64encode(private_pem).decode(), base64.b64encode(public_pem).decode()


ACCESS_PRIVATE_KEY, ACCESS_PUBLIC_KEY = generate_key_pair()
REFRESH_PRIVATE_KEY, REFRESH_PUBLIC_KEY = generate_key_pair()

# settings are read once at import time, so the environment must be ready first
os.environ.update({
    "ENVIRONMENT": "test",
    "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
    "ACCESS_TOKEN_PRIVATE_KEY": ACCESS_PRIVATE_KEY,
    "ACCESS_TOKEN_PUBLIC_KEY": ACCESS_PUBLIC_KEY,
    "REFRESH_TOKEN_PRIVATE_KEY": REFRESH_PRIVATE_KEY,
    "REFRESH_TOKEN_PUBLIC_KEY": REFRESH_PUBLIC_KEY,
    "LOG_DIR": tempfile.mkdtemp(prefix="notekeeper-logs-"),
    "NOTEKEEPER_SKIP_LIFESPAN_DB": "1",
})

import fakeredis  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from notekeeper.config import get_settings  # noqa: E402
from notekeeper.core.blacklist import RedisTokenBlacklist  # noqa: E402
from notekeeper.core.models.base import BaseModel  # noqa: E402
from notekeeper.core.models.note import Note  # noqa: E402
from notekeeper.core.models.user import User  # noqa: E402
from notekeeper.core.services.token_service import TokenService  # noqa: E402
from notekeeper.database import enable_sqlite_foreign_keys, get_db_session  # noqa: E402
from notekeeper.main import app  # noqa: E402
from notekeeper.middleware.auth import get_token_blacklist  # noqa: E402
from notekeeper.security.password import hash_password  # noqa: E402

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_PASSWORD = "Sup3r$ecret"


@pytest.fixture
def test_settings():
    return get_settings()


@pytest.fixture
async def test_engine():
    """Fresh SQLite in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,  # keep the same memory DB across connections
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_maker(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def fake_redis():
    client = fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)
    try:
        yield client
    finally:
        await client.aclose()


@pytest.fixture
def token_blacklist(fake_redis):
    return RedisTokenBlacklist(fake_redis)


@pytest.fixture
def test_app(session_maker, token_blacklist):
    """App wired to the test database and blacklist. One session per request, like production."""

    async def _override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_get_db
    app.dependency_overrides[get_token_blacklist] = lambda: token_blacklist
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    # https so the secure auth cookies are sent back by the client
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="https://testserver") as ac:
        yield ac


async def create_user(session, email: str, first_name: str = "Test", last_name: str = "User",
                      password: str = TEST_PASSWORD) -> User:
    user = User(
        email=email,
        first_name=first_name,
        last_name=last_name,
        password_hash=hash_password(password),
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def create_note(session, owner: User, title: str = "Test Note",
                      content: str = "This is a test note content", tags=None) -> Note:
    note = Note(title=title, content=content, tags=tags or [], owner_id=owner.id)
    session.add(note)
    await session.commit()
    return note


@pytest.fixture
def user_factory(test_session):
    async def _make(email: str, first_name: str = "Test", last_name: str = "User", password: str = TEST_PASSWORD):
        return await create_user(test_session, email, first_name, last_name, password)

    return _make


@pytest.fixture
def note_factory(test_session):
    async def _make(owner: User, title: str = "Test Note", content: str = "This is a test note content", tags=None):
        return await create_note(test_session, owner, title, content, tags)

    return _make


@pytest.fixture
async def test_user(test_session):
    return await create_user(test_session, "owner@example.com", "Olive", "Owner")


@pytest.fixture
async def other_user(test_session):
    return await create_user(test_session, "friend@example.com", "Fred", "Friend")


@pytest.fixture
async def third_user(test_session):
    return await create_user(test_session, "stranger@example.com", "Stan", "Stranger")


@pytest.fixture
async def test_note(test_session, test_user):
    return await create_note(test_session, test_user, tags=["test", "example"])


@pytest.fixture
def token_service(test_session):
    return TokenService(test_session)


@pytest.fixture
def auth_headers(test_user, token_service):
    """Bearer header with a valid access token for the test user."""
    return {"Authorization": f"Bearer {token_service.sign_access_token(test_user)}"}


@pytest.fixture
def other_auth_headers(other_user, token_service):
    return {"Authorization": f"Bearer {token_service.sign_access_token(other_user)}"}


@pytest.fixture
def third_auth_headers(third_user, token_service):
    return {"Authorization": f"Bearer {token_service.sign_access_token(third_user)}"}
