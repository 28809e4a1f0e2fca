"""Shared pydantic configuration for API schemas.

Request and response bodies use camelCase field names on the wire
(``firstName``, ``statusCode``); Python code uses snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialising field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(CamelModel):
    """Fields present on every successful response."""

    success: bool = Field(True, description="Always true for successful responses")
    message: str = Field(..., description="Human readable outcome")
    status_code: int = Field(..., description="HTTP status code", examples=[200])


class ErrorResponse(CamelModel):
    """Body returned for every failure."""

    success: bool = Field(False, description="Always false for failures")
    message: str = Field(..., examples=["Token not provided"])
    error: str | None = Field(None, description="Additional error detail")
    status_code: int = Field(..., examples=[401])
