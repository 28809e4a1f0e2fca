"""Root and health check routes. Neither requires authentication."""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from toolhub.infrastructure.api.schemas import SuccessResponse

router = APIRouter()


@router.get("/", response_model=SuccessResponse, tags=["root"])
async def root() -> SuccessResponse:
    return SuccessResponse(message="Python API REST", status_code=status.HTTP_200_OK)


@router.get("/health", tags=["health"])
async def health_check(request: Request):
    """Health check endpoint.

    Returns 200 if the service is running and the database answers,
    503 otherwise.
    """
    settings = request.app.state.settings
    db_healthy = await request.app.state.db_manager.check_connection()
    status_code = status.HTTP_200_OK if db_healthy else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(
        status_code=status_code,
        content={
            "success": db_healthy,
            "status": "healthy" if db_healthy else "unhealthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "database": "connected" if db_healthy else "disconnected",
            "statusCode": status_code,
        },
    )
