"""Core ToolHub utilities.

This module exports core utilities for use throughout the application.
"""

from toolhub.core.config import Settings, get_settings
from toolhub.core.logging import (
    bind_request_id,
    bind_user_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "bind_request_id",
    "bind_user_id",
    "clear_context",
]
