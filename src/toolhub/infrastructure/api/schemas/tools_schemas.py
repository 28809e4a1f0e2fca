"""Pydantic schemas for tool endpoints."""

from datetime import datetime

from pydantic import AnyHttpUrl, Field, TypeAdapter, ValidationError, field_validator

from toolhub.infrastructure.api.schemas.base import CamelModel, SuccessResponse

_http_url = TypeAdapter(AnyHttpUrl)


class ToolRequest(CamelModel):
    """Request body for creating or replacing a tool."""

    name: str = Field(..., min_length=2, description="Name must be at least 2 characters long")
    description: str = Field(
        ..., min_length=2, description="Description must be at least 2 characters long"
    )
    website: str = Field(..., description="Website must be a url")

    @field_validator("website")
    @classmethod
    def validate_website(cls, v: str) -> str:
        """Require an http(s) URL but store it exactly as given."""
        try:
            _http_url.validate_python(v)
        except ValidationError as e:
            raise ValueError("Website must be a url") from e
        return v


class ToolResponse(CamelModel):
    id: str
    name: str = Field(..., examples=["OpenAI"])
    description: str
    website: str = Field(..., examples=["http://openai.com/"])
    created_at: datetime
    updated_at: datetime


class ToolListResponse(SuccessResponse):
    tools: list[ToolResponse]
    counter: int


class ToolEnvelope(SuccessResponse):
    tool: ToolResponse
