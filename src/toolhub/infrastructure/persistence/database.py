"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides the database session management and engine configuration
for SQLAlchemy with async support. It supports PostgreSQL (asyncpg) in
deployment and SQLite (aiosqlite) for local runs and tests.

There is no module-level database handle: the application constructs one
``DatabaseManager`` at startup, stores it on ``app.state`` and disposes of it
on shutdown.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from toolhub.core.config import Settings
from toolhub.core.logging import get_logger

logger = get_logger(__name__)


def utcnow() -> datetime:
    """Timezone-aware current time used for row timestamps."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class DatabaseManager:
    """Database connection and session manager.

    Owns the async engine and session factory for one process. Both are
    created lazily on first use and released by ``disconnect``.
    """

    def __init__(self, settings: Settings, url: str | None = None) -> None:
        """Initialize the database manager.

        Args:
            settings: Application settings holding pool configuration.
            url: Optional database URL overriding the one derived from settings.
        """
        self.settings = settings
        self.url = url or settings.sqlalchemy_url
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the database engine."""
        if self._engine is None:
            if self.url.startswith("sqlite"):
                # An in-memory database only lives as long as its connection
                pool_args = {"poolclass": StaticPool} if ":memory:" in self.url else {}
                self._engine = create_async_engine(
                    self.url,
                    echo=self.settings.db_echo,
                    connect_args={"check_same_thread": False},
                    **pool_args,
                )
            else:
                self._engine = create_async_engine(
                    self.url,
                    echo=self.settings.db_echo,
                    pool_size=self.settings.db_pool_size,
                    max_overflow=self.settings.db_max_overflow,
                    pool_timeout=self.settings.db_pool_timeout,
                    pool_recycle=self.settings.db_pool_recycle,
                )
            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.debug("Database session factory created")
        return self._session_factory

    async def create_tables(self) -> None:
        """Create all tables defined on ``Base.metadata`` that do not exist yet."""
        # Register models on Base.metadata before create_all
        from toolhub.infrastructure.persistence import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def drop_tables(self) -> None:
        """Drop all database tables.

        WARNING: This will delete all data. Only use in testing!
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.warning("Database tables dropped")

    async def disconnect(self) -> None:
        """Close the database engine and all pooled connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session scope, rolling back on error.

        Example:
            async with db.session() as session:
                result = await session.execute(select(UserModel))
                users = result.scalars().all()
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """Check if database connection is working.

        Returns:
            bool: True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False
        logger.debug("Database connection check successful")
        return True


async def init_database(db: DatabaseManager) -> None:
    """Initialize the database on application startup.

    Verifies connectivity, creates tables when ``DB_AUTO_CREATE`` is on and
    creates the bootstrap owner when ``OWNER_EMAIL``/``OWNER_PASSWORD`` are set.

    Raises:
        RuntimeError: If the database cannot be reached.
    """
    if not await db.check_connection():
        raise RuntimeError("Failed to connect to database")

    if db.settings.db_auto_create:
        await db.create_tables()
    else:
        logger.info("DB_AUTO_CREATE disabled, skipping table creation")

    await _create_owner_from_env(db)


async def _create_owner_from_env(db: DatabaseManager) -> None:
    """Create the bootstrap owner from settings if configured and absent."""
    from toolhub.domain.entities import UserRole
    from toolhub.domain.services import EmailAlreadyRegisteredError, UserService

    settings = db.settings
    if not settings.owner_email or not settings.owner_password:
        logger.debug("Owner bootstrap variables not configured, skipping")
        return

    async with db.session() as session:
        service = UserService(session)
        try:
            owner = await service.create_user(
                first_name=settings.owner_first_name,
                last_name=settings.owner_last_name,
                email=settings.owner_email,
                password=settings.owner_password,
                role=UserRole.OWNER,
            )
        except EmailAlreadyRegisteredError:
            logger.info("Owner already exists, skipping bootstrap", email=settings.owner_email)
            return

    logger.info("Owner created from environment", user_id=owner.id, email=owner.email)
