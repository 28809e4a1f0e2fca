"""Password hashing utility using Argon2.

Provides password hashing and verification using Argon2id with a memory
cost of 64 MiB, three iterations and a parallelism of one.

Verification has three outcomes: the password matches, it does not match,
or verification could not be performed at all (for example because the
stored hash is malformed). Callers must not treat the last case as a wrong
password.
"""

import asyncio
from enum import Enum

from argon2 import PasswordHasher, Type
from argon2.exceptions import (
    HashingError,
    InvalidHashError,
    VerificationError,
    VerifyMismatchError,
)

from toolhub.core.logging import get_logger

logger = get_logger(__name__)

MEMORY_COST = 2**16
TIME_COST = 3
PARALLELISM = 1

_hasher = PasswordHasher(
    time_cost=TIME_COST,
    memory_cost=MEMORY_COST,
    parallelism=PARALLELISM,
    type=Type.ID,
)


class PasswordHashingError(Exception):
    """Raised when the underlying Argon2 call fails to produce a hash."""

    pass


class PasswordCheck(str, Enum):
    """Result of verifying a candidate password against a stored hash."""

    MATCH = "match"
    MISMATCH = "mismatch"
    ERROR = "error"


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Args:
        password: The plaintext password to hash.

    Returns:
        The hashed password string.

    Raises:
        PasswordHashingError: If Argon2 fails (e.g. memory exhaustion).

    Example:
        >>> hashed = hash_password("SecureP@ss123!")
        >>> hashed.startswith("$argon2id$")
        True
    """
    try:
        return _hasher.hash(password)
    except HashingError as e:
        raise PasswordHashingError(str(e)) from e


def verify_password(hashed: str, password: str) -> PasswordCheck:
    """Verify a password against a stored hash.

    The comparison is constant-time within Argon2's own guarantees.

    Args:
        hashed: The stored Argon2 hash.
        password: The candidate plaintext password.

    Returns:
        ``MATCH`` or ``MISMATCH``, or ``ERROR`` when the hash is malformed or
        the verification call itself fails.

    Example:
        >>> hashed = hash_password("SecureP@ss123!")
        >>> verify_password(hashed, "SecureP@ss123!")
        <PasswordCheck.MATCH: 'match'>
        >>> verify_password(hashed, "wrong")
        <PasswordCheck.MISMATCH: 'mismatch'>
    """
    try:
        _hasher.verify(hashed, password)
    except VerifyMismatchError:
        return PasswordCheck.MISMATCH
    except (InvalidHashError, VerificationError) as e:
        logger.error("Password verification could not be performed", error=str(e))
        return PasswordCheck.ERROR
    return PasswordCheck.MATCH


def needs_rehash(hashed: str) -> bool:
    """Check if a password hash was made with different parameters.

    Args:
        hashed: The hashed password to check.

    Returns:
        True if the hash should be updated, False otherwise.
    """
    return _hasher.check_needs_rehash(hashed)


async def hash_password_async(password: str) -> str:
    """Hash a password in a worker thread so the event loop stays free."""
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(hashed: str, password: str) -> PasswordCheck:
    """Verify a password in a worker thread so the event loop stays free."""
    return await asyncio.to_thread(verify_password, hashed, password)
