"""Pydantic schemas for authentication endpoints."""

from pydantic import EmailStr, Field

from toolhub.infrastructure.api.schemas.base import CamelModel, SuccessResponse


class LoginRequest(CamelModel):
    """Request body for login."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="User's password")


class LoginResponse(SuccessResponse):
    """Response for a successful login."""

    access_token: str = Field(..., description="JWT bearer token")
    token_type: str = Field("Bearer", description="Authorization scheme to use")
    expires_in: int = Field(..., description="Token lifetime in seconds")
