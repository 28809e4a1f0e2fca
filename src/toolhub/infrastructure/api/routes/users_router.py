"""User management API routes.

All routes require an authenticated caller. Creating a user additionally
requires the owner role.
"""

from fastapi import APIRouter, status

from toolhub.core.logging import get_logger
from toolhub.domain.services import EmailAlreadyRegisteredError
from toolhub.infrastructure.api.dependencies import OwnerUser, UserServiceDep
from toolhub.infrastructure.api.errors import ApiError
from toolhub.infrastructure.api.schemas import (
    AdminUserCreateRequest,
    DeleteResponse,
    ErrorResponse,
    UserEnvelope,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)
from toolhub.infrastructure.persistence.models import UserModel

logger = get_logger(__name__)

router = APIRouter()

EMAIL_TAKEN_MESSAGE = "There is already a registered user with that email"


async def _get_user_or_404(users: UserServiceDep, user_id: str) -> UserModel:
    user = await users.get_user(user_id)
    if user is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "User not found", "Unregistered user")
    return user


@router.get("", response_model=UserListResponse)
async def list_users(users: UserServiceDep) -> UserListResponse:
    """List all users."""
    found = await users.list_users()
    return UserListResponse(
        message="Get list all users",
        users=[UserResponse.model_validate(u) for u in found],
        counter=len(found),
        status_code=status.HTTP_200_OK,
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserEnvelope,
    responses={
        403: {"model": ErrorResponse, "description": "Access denied, administrators only"},
        404: {"model": ErrorResponse, "description": "Authenticated user not found"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def create_user(
    request: AdminUserCreateRequest,
    owner: OwnerUser,
    users: UserServiceDep,
) -> UserEnvelope:
    """Create a user with any role. Owner only."""
    try:
        user = await users.create_user(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            password=request.password,
            role=request.role,
        )
    except EmailAlreadyRegisteredError:
        raise ApiError(status.HTTP_409_CONFLICT, EMAIL_TAKEN_MESSAGE, "Email already registered")

    logger.info("User created by owner", owner_id=owner.id, user_id=user.id)
    return UserEnvelope(
        message="New User Created",
        user=UserResponse.model_validate(user),
        status_code=status.HTTP_201_CREATED,
    )


@router.get(
    "/{user_id}",
    response_model=UserEnvelope,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_user(user_id: str, users: UserServiceDep) -> UserEnvelope:
    """Get a user by ID."""
    user = await _get_user_or_404(users, user_id)
    return UserEnvelope(
        message="Get user by ID",
        user=UserResponse.model_validate(user),
        status_code=status.HTTP_200_OK,
    )


@router.put(
    "/{user_id}",
    response_model=UserEnvelope,
    responses={
        404: {"model": ErrorResponse, "description": "User not found"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def update_user(
    user_id: str, request: UserUpdateRequest, users: UserServiceDep
) -> UserEnvelope:
    """Replace a user's profile. The new password is hashed before storage."""
    user = await _get_user_or_404(users, user_id)
    try:
        user = await users.update_user(
            user,
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            password=request.password,
        )
    except EmailAlreadyRegisteredError:
        raise ApiError(status.HTTP_409_CONFLICT, EMAIL_TAKEN_MESSAGE, "Email already registered")

    return UserEnvelope(
        message="User Updated",
        user=UserResponse.model_validate(user),
        status_code=status.HTTP_200_OK,
    )


@router.delete(
    "/{user_id}",
    response_model=DeleteResponse,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def delete_user(user_id: str, users: UserServiceDep) -> DeleteResponse:
    """Delete a user by ID."""
    if await users.get_user(user_id) is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, "User not found", "Not Found")

    await users.delete_user(user_id)
    return DeleteResponse(
        message=f"User with ID {user_id} deleted with success",
        status_code=status.HTTP_200_OK,
    )
