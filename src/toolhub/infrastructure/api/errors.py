"""API error type and the JSON envelope used for every failure response.

Failures are rendered as::

    {"success": false, "message": "...", "error": "...", "statusCode": 401}

``error`` is omitted when there is nothing to add beyond ``message``.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from toolhub.core.logging import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """An error that maps directly onto an HTTP response."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.error = error
        self.headers = headers
        super().__init__(message)


def error_response(
    status_code: int,
    message: str,
    error: str | None = None,
    headers: dict[str, str] | None = None,
    **extra: object,
) -> JSONResponse:
    """Build a failure response in the standard envelope."""
    content: dict[str, object] = {"success": False, "message": message}
    if error is not None:
        content["error"] = error
    content.update(extra)
    content["statusCode"] = status_code
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application instance.
    """

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        return error_response(exc.status_code, exc.message, exc.error, exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Render body validation failures as 400 with per-field messages."""
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"] if part != "body"),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        logger.info("Request validation failed", path=request.url.path, error_count=len(errors))
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Validation error",
            errors=errors,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            str(exc) if request.app.state.settings.debug else "An unexpected error occurred",
        )
