"""SQLAlchemy models for ToolHub tables.

All models inherit from the Base class defined in database.py and are
created on application startup when DB_AUTO_CREATE is enabled.
"""

from toolhub.infrastructure.persistence.models.tool import ToolModel
from toolhub.infrastructure.persistence.models.user import UserModel

__all__ = [
    "ToolModel",
    "UserModel",
]
