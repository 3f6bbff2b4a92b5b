"""
Pytest configuration and fixtures for blogapi tests.

Every test gets a fresh in-memory SQLite database and a temporary
upload directory; the app's session dependency is overridden to use it.
"""
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from blogapi.auth.jwt_handler import TokenService
from blogapi.auth.passwords import Argon2PasswordHasher
from blogapi.config import Settings
from blogapi.database import get_db_session
from blogapi.main import create_app
from blogapi.models import Base

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_JWT_SECRET = "test-secret-key-for-testing"


# ============================================
# Settings & Services
# ============================================

@pytest.fixture
def upload_dir(tmp_path):
    path = tmp_path / "uploads"
    path.mkdir()
    return path


@pytest.fixture
def test_settings(upload_dir) -> Settings:
    return Settings(
        DATABASE_URL=TEST_DATABASE_URL,
        JWT_SECRET_KEY=TEST_JWT_SECRET,
        JWT_ACCESS_EXPIRE_MINUTES=15,
        UPLOAD_DIR=str(upload_dir),
        SEED_ON_STARTUP=False,
        DEBUG=True,
    )


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret=TEST_JWT_SECRET, expire_minutes=15)


@pytest.fixture(scope="session")
def password_hasher() -> Argon2PasswordHasher:
    return Argon2PasswordHasher()


# ============================================
# Database
# ============================================

@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory engine; StaticPool shares the one connection."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    session = session_factory()
    try:
        yield session
    finally:
        await session.rollback()
        await session.close()


# ============================================
# App & Client
# ============================================

@pytest.fixture
def app(test_settings, session_factory):
    """Application wired to the test database."""
    application = create_app(test_settings)

    async def override_get_db_session():
        session = session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    application.dependency_overrides[get_db_session] = override_get_db_session
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture
async def admin_token(client) -> str:
    """Register the admin user and return its bearer token."""
    response = await client.post(
        "/api/auth/register",
        json={"username": "admin", "password": "admin123"},
    )
    assert response.status_code == 200
    return response.json()["token"]


@pytest.fixture
def auth_headers(admin_token) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


# ============================================
# Pytest Configuration
# ============================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "fast: Fast unit tests (no database, no HTTP)"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that go through the HTTP API"
    )
