"""Domain entities for ToolHub."""

from toolhub.domain.entities.user import UserRole

__all__ = ["UserRole"]
