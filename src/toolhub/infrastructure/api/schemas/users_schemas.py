"""Pydantic schemas for user endpoints and auth responses."""

from datetime import datetime

from pydantic import EmailStr, Field

from toolhub.domain.entities import UserRole
from toolhub.infrastructure.api.schemas.base import CamelModel, SuccessResponse


class UserCreateRequest(CamelModel):
    """Request body for creating a user (signup and owner-only create)."""

    first_name: str = Field(
        ..., min_length=2, description="First Name must be at least 2 characters long"
    )
    last_name: str = Field(
        ..., min_length=2, description="Last Name must be at least 2 characters long"
    )
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class AdminUserCreateRequest(UserCreateRequest):
    """Owner-only create request; the role may be elevated."""

    role: UserRole = Field(UserRole.VIEWER, description="Role to assign")


class UserUpdateRequest(UserCreateRequest):
    """Request body for replacing a user's profile. The password is re-hashed."""

    pass


class UserResponse(CamelModel):
    """User as returned by the API. The password hash is never included."""

    id: str = Field(..., description="User ID (UUID)")
    first_name: str = Field(..., examples=["John"])
    last_name: str = Field(..., examples=["Doe"])
    email: str = Field(..., examples=["john@example.com"])
    active: bool = Field(..., examples=[True])
    role: UserRole = Field(..., examples=[UserRole.VIEWER])
    created_at: datetime
    updated_at: datetime


class UserListResponse(SuccessResponse):
    users: list[UserResponse]
    counter: int = Field(..., description="Number of users returned")


class UserEnvelope(SuccessResponse):
    user: UserResponse


class DeleteResponse(SuccessResponse):
    pass
