"""API routes for ToolHub."""

from toolhub.infrastructure.api.routes.auth_router import router as auth_router
from toolhub.infrastructure.api.routes.root_router import router as root_router
from toolhub.infrastructure.api.routes.tools_router import router as tools_router
from toolhub.infrastructure.api.routes.users_router import router as users_router

__all__ = [
    "auth_router",
    "root_router",
    "tools_router",
    "users_router",
]
