"""Repositories for database access."""

from toolhub.infrastructure.persistence.repositories.tool_repository import ToolRepository
from toolhub.infrastructure.persistence.repositories.user_repository import UserRepository

__all__ = [
    "ToolRepository",
    "UserRepository",
]
