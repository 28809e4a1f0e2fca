"""Pytest configuration for all tests."""

from typing import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from toolhub.core.config import Settings
from toolhub.domain.entities import UserRole
from toolhub.domain.services import UserService
from toolhub.infrastructure.api.app import create_app
from toolhub.infrastructure.auth import JWTService
from toolhub.infrastructure.persistence.database import DatabaseManager
from toolhub.infrastructure.persistence.models import UserModel

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
TEST_PASSWORD = "Password123!"


@pytest.fixture
def settings() -> Settings:
    """Settings for an isolated in-memory SQLite database."""
    return Settings(
        _env_file=None,
        environment="testing",
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret=TEST_JWT_SECRET,
        owner_email=None,
        owner_password=None,
    )


@pytest_asyncio.fixture
async def db_manager(settings: Settings) -> AsyncGenerator[DatabaseManager, None]:
    """Create a database manager with all tables created."""
    db = DatabaseManager(settings)
    await db.create_tables()
    yield db
    await db.drop_tables()
    await db.disconnect()


@pytest_asyncio.fixture
async def db_session(db_manager: DatabaseManager) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with db_manager.session() as session:
        yield session


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(TEST_JWT_SECRET)


@pytest.fixture
def app(settings: Settings, db_manager: DatabaseManager, jwt_service: JWTService) -> FastAPI:
    return create_app(settings=settings, db_manager=db_manager, jwt_service=jwt_service)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client bound to the application without a network."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[UserModel]]:
    """Factory creating a persisted user with ``TEST_PASSWORD``."""

    async def _make_user(
        email: str = "jane@example.com",
        role: UserRole = UserRole.VIEWER,
        first_name: str = "Jane",
        last_name: str = "Doe",
    ) -> UserModel:
        return await UserService(db_session).create_user(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=TEST_PASSWORD,
            role=role,
        )

    return _make_user


@pytest_asyncio.fixture
async def owner(make_user) -> UserModel:
    return await make_user(email="owner@example.com", role=UserRole.OWNER)


@pytest_asyncio.fixture
async def viewer(make_user) -> UserModel:
    return await make_user(email="viewer@example.com", role=UserRole.VIEWER)


@pytest.fixture
def owner_headers(owner: UserModel, jwt_service: JWTService) -> dict[str, str]:
    return {"Authorization": f"Bearer {jwt_service.issue(owner.id)}"}


@pytest.fixture
def viewer_headers(viewer: UserModel, jwt_service: JWTService) -> dict[str, str]:
    return {"Authorization": f"Bearer {jwt_service.issue(viewer.id)}"}
