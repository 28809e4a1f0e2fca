"""Domain services for ToolHub."""

from toolhub.domain.services.tool_service import ToolAlreadyRegisteredError, ToolService
from toolhub.domain.services.user_service import (
    EmailAlreadyRegisteredError,
    InvalidPasswordError,
    PasswordVerificationError,
    UserNotFoundError,
    UserService,
)

__all__ = [
    "EmailAlreadyRegisteredError",
    "InvalidPasswordError",
    "PasswordVerificationError",
    "ToolAlreadyRegisteredError",
    "ToolService",
    "UserNotFoundError",
    "UserService",
]
