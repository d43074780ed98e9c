"""Pytest configuration for all tests."""

import os

# Settings are cached on first use; configure the test environment first.
os.environ.setdefault("INCAPACIDADES_ENVIRONMENT", "testing")
os.environ.setdefault("INCAPACIDADES_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("INCAPACIDADES_LOG_LEVEL", "WARNING")
os.environ.setdefault("INCAPACIDADES_PASSWORD_HASH_TIME_COST", "1")
os.environ.setdefault("INCAPACIDADES_PASSWORD_HASH_MEMORY_COST", "1024")
os.environ.setdefault("INCAPACIDADES_PASSWORD_HASH_PARALLELISM", "1")

import uuid  # noqa: E402
from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from incapacidades.domain.entities import Role  # noqa: E402
from incapacidades.infrastructure.auth import get_password_hasher, jwt_service  # noqa: E402
from incapacidades.infrastructure.persistence.database import Base  # noqa: E402
from incapacidades.infrastructure.persistence.models import UserModel  # noqa: E402

TEST_PASSWORD = "Password123"


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from incapacidades.infrastructure.api.app import app
    from incapacidades.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}


@pytest.fixture
def make_user(db_session: AsyncSession):
    """Factory inserting a user directly into the database."""
    counter = iter(range(1000000, 9999999))

    async def _make_user(
        email: str | None = None,
        password: str = TEST_PASSWORD,
        role: Role = Role.USER,
        is_active: bool = True,
    ) -> UserModel:
        user = UserModel(
            id=str(uuid.uuid4()),
            email=email or f"user-{uuid.uuid4().hex[:8]}@example.com",
            password_hash=get_password_hasher().hash(password),
            full_name="Test User",
            national_id=str(next(counter)),
            phone="3001112233",
            role=role,
            is_active=is_active,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


def access_token_for(user: UserModel) -> str:
    return jwt_service.create_access_token(
        user_id=user.id,
        email=user.email,
        role=Role(user.role).value,
    )


def auth_headers(user: UserModel) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token_for(user)}"}


@pytest_asyncio.fixture
async def admin_user(make_user) -> UserModel:
    """Create an active administrator."""
    return await make_user(email="admin@example.com", role=Role.ADMIN)


@pytest_asyncio.fixture
async def regular_user(make_user) -> UserModel:
    """Create an active regular user."""
    return await make_user(email="user@example.com")


@pytest.fixture
def admin_headers(admin_user: UserModel) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture
def user_headers(regular_user: UserModel) -> dict[str, str]:
    return auth_headers(regular_user)


@pytest.fixture
def headers_for():
    """Build bearer headers for any user."""
    return auth_headers
