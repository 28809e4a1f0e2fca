"""Persistence layer: engine/session management, models and repositories."""

from toolhub.infrastructure.persistence.database import (
    Base,
    DatabaseManager,
    init_database,
)

__all__ = ["Base", "DatabaseManager", "init_database"]
