"""Authentication middleware for ToolHub.

Every request under the protected prefix must carry
``Authorization: Bearer <token>``. The middleware rejects the request when
the token is missing or invalid and otherwise stores the token's user ID on
``request.state.user_id`` for downstream dependencies.

Rejections:
    - header missing, not ``Bearer``, or no token directly after ``Bearer ``:
      401 "Token not provided"
    - token fails verification: 401 "Invalid token"
    - verification raises unexpectedly: 403 "Invalid or expired token"
"""

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from toolhub.core.logging import bind_user_id, get_logger
from toolhub.infrastructure.api.errors import error_response
from toolhub.infrastructure.auth.jwt_service import JWTService

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Middleware that authenticates requests under ``protected_prefix``."""

    def __init__(
        self,
        app: ASGIApp,
        jwt_service: JWTService,
        protected_prefix: str = "/api/v1",
    ) -> None:
        super().__init__(app)
        self.jwt_service = jwt_service
        self.protected_prefix = protected_prefix.rstrip("/") + "/"

    def is_protected(self, request: Request) -> bool:
        """Check whether the request path falls under the protected prefix."""
        if request.method == "OPTIONS":
            return False
        path = request.url.path
        return path.startswith(self.protected_prefix) or path == self.protected_prefix.rstrip("/")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Authenticate the request and enrich request state.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint to call.

        Returns:
            The rejection response, or the response from the application.
        """
        if not self.is_protected(request):
            return await call_next(request)

        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith(BEARER_PREFIX):
            logger.info("Authentication failed: token not provided", path=request.url.path)
            return error_response(status.HTTP_401_UNAUTHORIZED, "Token not provided")

        # The token is the first space-separated segment after the scheme
        token = auth_header.split(" ")[1]
        if not token:
            logger.info("Authentication failed: empty bearer token", path=request.url.path)
            return error_response(status.HTTP_401_UNAUTHORIZED, "Token not provided")

        try:
            payload = self.jwt_service.verify(token)
        except Exception as e:
            logger.error(
                "Unexpected error while verifying token",
                error=str(e),
                exc_type=type(e).__name__,
                path=request.url.path,
            )
            return error_response(
                status.HTTP_403_FORBIDDEN,
                "Invalid or expired token",
                str(e),
            )

        if payload is None:
            logger.info("Authentication failed: invalid token", path=request.url.path)
            return error_response(status.HTTP_401_UNAUTHORIZED, "Invalid token")

        user_id = payload.get("userId") or payload["sub"]
        request.state.user_id = user_id
        bind_user_id(user_id)

        return await call_next(request)
