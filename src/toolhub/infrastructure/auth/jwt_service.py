"""JWT token service.

Issues and verifies HMAC-signed bearer tokens that carry a user ID.
Tokens are stateless: nothing is stored server-side and a token stays
valid until its ``exp`` claim passes.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import jwt

from toolhub.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TOKEN_TTL = timedelta(hours=1)
SUPPORTED_ALGORITHMS = ("HS256", "HS384", "HS512")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JWTService:
    """Service for creating and validating access tokens.

    The secret key and algorithm are fixed for the lifetime of the instance.
    ``clock`` returns the current time and can be replaced in tests.
    """

    REQUIRED_CLAIMS = ("sub", "iat", "exp")

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        default_ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Secret key for signing tokens.
            algorithm: HMAC algorithm name (HS256, HS384 or HS512).
            default_ttl: Lifetime of tokens issued without an explicit TTL.
            clock: Callable returning the current UTC time.

        Raises:
            ValueError: If the secret is empty or the algorithm unsupported.
        """
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported JWT algorithm: {algorithm}")
        self._secret_key = secret_key.encode("utf-8")
        self.algorithm = algorithm
        self.default_ttl = default_ttl
        self._clock = clock or _utcnow

    def issue(self, subject_id: str, expires_delta: timedelta | None = None) -> str:
        """Create a signed access token for a user.

        Args:
            subject_id: The user's unique identifier.
            expires_delta: Token lifetime. Defaults to ``default_ttl``.

        Returns:
            Encoded JWT.
        """
        if expires_delta is None:
            expires_delta = self.default_ttl

        now = self._clock()
        payload = {
            "sub": subject_id,
            "userId": subject_id,
            "iat": int(now.timestamp()),
            "exp": int((now + expires_delta).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any] | None:
        """Decode and validate a token.

        The signature, algorithm, required claims and expiry are checked.
        Expiry is compared against ``clock`` with no leeway; ``iat`` is only
        required to be present.

        Args:
            token: The encoded JWT.

        Returns:
            The decoded payload, or None if the token is expired, malformed,
            signed with another key or uses another algorithm.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={
                    "require": list(self.REQUIRED_CLAIMS),
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.PyJWTError as e:
            logger.debug("Token verification failed", reason=type(e).__name__)
            return None

        # Expiry is checked here so the injected clock is honoured
        expires_at = payload["exp"]
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            logger.debug("Token verification failed", reason="DecodeError")
            return None
        if expires_at <= self._clock().timestamp():
            logger.debug("Token verification failed", reason="ExpiredSignatureError")
            return None
        return payload

    def get_expires_in(self) -> int:
        """Get the default token lifetime in seconds."""
        return int(self.default_ttl.total_seconds())
