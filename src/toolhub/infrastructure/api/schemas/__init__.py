"""Pydantic schemas for API request/response validation."""

from toolhub.infrastructure.api.schemas.auth_schemas import LoginRequest, LoginResponse
from toolhub.infrastructure.api.schemas.base import CamelModel, ErrorResponse, SuccessResponse
from toolhub.infrastructure.api.schemas.tools_schemas import (
    ToolEnvelope,
    ToolListResponse,
    ToolRequest,
    ToolResponse,
)
from toolhub.infrastructure.api.schemas.users_schemas import (
    AdminUserCreateRequest,
    DeleteResponse,
    UserCreateRequest,
    UserEnvelope,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)

__all__ = [
    "AdminUserCreateRequest",
    "CamelModel",
    "DeleteResponse",
    "ErrorResponse",
    "LoginRequest",
    "LoginResponse",
    "SuccessResponse",
    "ToolEnvelope",
    "ToolListResponse",
    "ToolRequest",
    "ToolResponse",
    "UserCreateRequest",
    "UserEnvelope",
    "UserListResponse",
    "UserResponse",
    "UserUpdateRequest",
]
