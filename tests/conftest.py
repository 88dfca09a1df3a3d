"""Test configuration and fixtures."""

import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ingest.access.base import Actor
from ingest.config.database import enable_sqlite_foreign_keys
from ingest.config.settings import settings
from ingest.dependencies.database import get_db
from ingest.main import app

# Import all models to register them with Base.metadata
from ingest.models import *  # noqa: F403, F401
from ingest.models.base import Base
from ingest.models.user import User
from ingest.services.jwt_service import JWTService
from ingest.utils.security import hash_password

TEST_PASSWORD = "TestPassword123!"


@pytest.fixture(scope="session", autouse=True)
def setup_test_settings():
    """Mark the app as running under tests."""
    settings.TESTING = True
    yield


# Fresh in-memory database for every test
@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    """Session factory bound to the test database."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Database session for seeding and service tests."""
    async with session_factory() as session:
        yield session


# Async test client
@pytest_asyncio.fixture
async def async_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client using the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.pop(get_db, None)


def make_unique_email(prefix: str = "user") -> str:
    """Generate unique email for each test to avoid conflicts."""
    return f"{prefix}_{uuid.uuid4().hex[:8]}@example.com"


async def create_user(
    db: AsyncSession,
    email: str | None = None,
    is_superuser: bool = False,
) -> User:
    """Create a user directly in the database."""
    user = User(
        email=email or make_unique_email(),
        name="Test User",
        password_hash=hash_password(TEST_PASSWORD),
        is_active=True,
        is_superuser=is_superuser,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


def auth_headers(user: User, group_ids: list[int] | None = None) -> dict[str, str]:
    """Build bearer headers for a user."""
    token = JWTService().create_access_token(user_id=user.id, email=user.email, group_ids=group_ids)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def owner(db_session) -> User:
    """User owning the resources under test."""
    return await create_user(db_session, make_unique_email("owner"))


@pytest_asyncio.fixture
async def other_user(db_session) -> User:
    """User with no relation to the resources under test."""
    return await create_user(db_session, make_unique_email("other"))


@pytest_asyncio.fixture
async def admin_user(db_session) -> User:
    """Superuser allowed to manage policies."""
    return await create_user(db_session, make_unique_email("admin"), is_superuser=True)


@pytest.fixture
def owner_actor(owner) -> Actor:
    return Actor.from_user(owner)


@pytest.fixture
def other_actor(other_user) -> Actor:
    return Actor.from_user(other_user)


@pytest.fixture
def user_factory(db_session):
    """Create extra users inside a test."""

    async def factory(email: str | None = None, is_superuser: bool = False) -> User:
        return await create_user(db_session, email, is_superuser)

    return factory


@pytest.fixture
def headers_for():
    """Build bearer headers for a user, optionally with group claims."""
    return auth_headers


@pytest.fixture
def unique_email():
    """Generate unique emails inside a test."""
    return make_unique_email
