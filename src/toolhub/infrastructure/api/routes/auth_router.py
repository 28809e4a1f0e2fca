"""Authentication API routes.

Provides endpoints for self-service signup and login.
"""

from fastapi import APIRouter, status

from toolhub.core.logging import get_logger
from toolhub.domain.services import (
    EmailAlreadyRegisteredError,
    InvalidPasswordError,
    UserNotFoundError,
)
from toolhub.infrastructure.api.dependencies import JWTServiceDep, UserServiceDep
from toolhub.infrastructure.api.errors import ApiError
from toolhub.infrastructure.api.schemas import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    UserCreateRequest,
    UserEnvelope,
    UserResponse,
)

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=UserEnvelope,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        500: {"model": ErrorResponse, "description": "Failed to register user"},
    },
)
async def signup(request: UserCreateRequest, users: UserServiceDep) -> UserEnvelope:
    """Register a new user.

    Self-registered users always get the viewer role; only an owner can
    create users with other roles through ``POST /api/v1/users``.
    """
    try:
        user = await users.create_user(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            password=request.password,
        )
    except EmailAlreadyRegisteredError:
        raise ApiError(status.HTTP_409_CONFLICT, "Email already registered")
    except Exception as e:
        logger.error("Signup failed", email=request.email, error=str(e))
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to register user", str(e)
        ) from e

    return UserEnvelope(
        message="New User Created",
        user=UserResponse.model_validate(user),
        status_code=status.HTTP_201_CREATED,
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid password"},
        404: {"model": ErrorResponse, "description": "Email not registered"},
        500: {"model": ErrorResponse, "description": "User login attempt failed"},
    },
)
async def login(
    request: LoginRequest,
    users: UserServiceDep,
    jwt_service: JWTServiceDep,
) -> LoginResponse:
    """Authenticate with email and password and receive an access token."""
    try:
        user = await users.authenticate(request.email, request.password)
    except UserNotFoundError:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Email not registered")
    except InvalidPasswordError:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Invalid password")
    except Exception as e:
        logger.error("Login failed", email=request.email, error=str(e))
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "User login attempt failed", str(e)
        ) from e

    access_token = jwt_service.issue(user.id)
    logger.info("User logged in", user_id=user.id)

    return LoginResponse(
        message="Login Success",
        access_token=access_token,
        expires_in=jwt_service.get_expires_in(),
        status_code=status.HTTP_200_OK,
    )
