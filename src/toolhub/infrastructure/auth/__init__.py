"""Authentication infrastructure components.

This module provides password hashing and the JWT token service.
"""

from toolhub.infrastructure.auth.jwt_service import DEFAULT_TOKEN_TTL, JWTService
from toolhub.infrastructure.auth.password_hasher import (
    PasswordCheck,
    PasswordHashingError,
    hash_password,
    hash_password_async,
    needs_rehash,
    verify_password,
    verify_password_async,
)

__all__ = [
    "DEFAULT_TOKEN_TTL",
    "JWTService",
    "PasswordCheck",
    "PasswordHashingError",
    "hash_password",
    "hash_password_async",
    "needs_rehash",
    "verify_password",
    "verify_password_async",
]
