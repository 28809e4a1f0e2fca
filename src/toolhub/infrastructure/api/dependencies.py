"""FastAPI dependencies for database access, authentication and authorization.

The database manager and JWT service are built once in ``create_app`` and
stored on ``app.state``; these dependencies hand them to routes.
"""

import asyncio
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from toolhub.core.logging import get_logger
from toolhub.domain.services import ToolService, UserService
from toolhub.infrastructure.api.errors import ApiError
from toolhub.infrastructure.auth import JWTService
from toolhub.infrastructure.persistence.database import DatabaseManager
from toolhub.infrastructure.persistence.models import UserModel

logger = get_logger(__name__)


def get_db_manager(request: Request) -> DatabaseManager:
    """Get the database manager created at application startup."""
    return request.app.state.db_manager


async def get_db_session(
    db: Annotated[DatabaseManager, Depends(get_db_manager)],
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for the duration of a request.

    Example:
        @router.get("/users")
        async def list_users(session: Annotated[AsyncSession, Depends(get_db_session)]):
            ...
    """
    async with db.session() as session:
        yield session


def get_jwt_service(request: Request) -> JWTService:
    """Get the process-wide JWT service."""
    return request.app.state.jwt_service


def get_user_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserService:
    return UserService(session)


def get_tool_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ToolService:
    return ToolService(session)


def get_current_user_id(request: Request) -> str:
    """Get the user ID attached by ``AuthenticationMiddleware``.

    Raises:
        ApiError: 401 if the request was not authenticated.
    """
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Token not provided")
    return user_id


async def require_owner(
    request: Request,
    user_id: Annotated[str, Depends(get_current_user_id)],
    users: Annotated[UserService, Depends(get_user_service)],
) -> UserModel:
    """Ensure the authenticated user exists and holds the owner role.

    Returns:
        UserModel: The authenticated owner.

    Raises:
        ApiError: 404 if the user no longer exists, 403 if the user is not an
            owner, 503 if the lookup exceeds the configured timeout.
    """
    timeout = request.app.state.settings.principal_lookup_timeout_seconds
    try:
        user = await asyncio.wait_for(users.get_user(user_id), timeout=timeout)
    except asyncio.TimeoutError:
        logger.error("User lookup timed out", user_id=user_id, timeout=timeout)
        raise ApiError(status.HTTP_503_SERVICE_UNAVAILABLE, "User lookup timed out")

    if user is None:
        logger.warning("Authenticated user not found in database", user_id=user_id)
        raise ApiError(status.HTTP_404_NOT_FOUND, "User not found")

    if not user.role.is_owner:
        logger.info("Owner access denied", user_id=user_id, role=user.role.value)
        raise ApiError(status.HTTP_403_FORBIDDEN, "Access denied, administrators only")

    return user


OwnerUser = Annotated[UserModel, Depends(require_owner)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ToolServiceDep = Annotated[ToolService, Depends(get_tool_service)]
JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]
