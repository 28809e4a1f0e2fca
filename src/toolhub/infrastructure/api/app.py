"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from toolhub.core.config import Settings, get_settings
from toolhub.core.logging import (
    bind_request_id,
    clear_context,
    configure_logging,
    get_logger,
    new_request_id,
)
from toolhub.infrastructure.api.errors import register_exception_handlers
from toolhub.infrastructure.auth import JWTService
from toolhub.infrastructure.auth.middleware import AuthenticationMiddleware
from toolhub.infrastructure.persistence.database import DatabaseManager, init_database

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging and prepares the database on startup, and releases
    the connection pool on shutdown.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings: Settings = app.state.settings
    db: DatabaseManager = app.state.db_manager

    configure_logging(settings)
    logger.info(
        "Starting ToolHub",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    try:
        await init_database(db)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down ToolHub")
    await db.disconnect()
    logger.info("Database connection closed")


def create_app(
    settings: Settings | None = None,
    db_manager: DatabaseManager | None = None,
    jwt_service: JWTService | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use. Loaded from the environment if omitted.
        db_manager: Database manager to use. Built from ``settings`` if omitted.
        jwt_service: Token service to use. Built from ``settings`` if omitted.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="REST API for managing users and a catalogue of tools",
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        openapi_url=None if settings.is_production else "/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db_manager = db_manager or DatabaseManager(settings)
    app.state.jwt_service = jwt_service or JWTService(
        secret_key=settings.jwt_secret,
        algorithm=settings.jwt_alg,
        default_ttl=timedelta(minutes=settings.access_token_expire_minutes),
    )

    register_routes(app, settings)
    register_exception_handlers(app)
    register_middleware(app, settings)

    return app


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register API routes.

    Args:
        app: FastAPI application instance.
        settings: Application settings.
    """
    from toolhub.infrastructure.api.routes import (
        auth_router,
        root_router,
        tools_router,
        users_router,
    )

    app.include_router(root_router)
    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(users_router, prefix=f"{settings.api_prefix}/users", tags=["users"])
    app.include_router(tools_router, prefix=f"{settings.api_prefix}/tools", tags=["tools"])


def register_middleware(app: FastAPI, settings: Settings) -> None:
    """Register middleware.

    Starlette runs the last registered middleware first, so requests pass
    through CORS, then request logging, then authentication.

    Args:
        app: FastAPI application instance.
        settings: Application settings.
    """
    app.add_middleware(
        AuthenticationMiddleware,
        jwt_service=app.state.jwt_service,
        protected_prefix=settings.api_prefix,
    )

    @app.middleware("http")
    async def logging_middleware(request, call_next):
        """Log every request and tag it with a request ID."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        bind_request_id(request_id)

        logger.info("Request started", method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_context()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        max_age=settings.cors_max_age,
    )
