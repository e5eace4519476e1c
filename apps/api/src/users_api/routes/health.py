"""Health check and service info routes, mounted at the application root."""

from fastapi import APIRouter, Depends, Request
from users_api.config import Settings, get_settings
from users_api.models.envelope import SuccessResponse
from users_api.models.health import HealthCheckResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=SuccessResponse[HealthCheckResponse])
async def health_check(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> SuccessResponse[HealthCheckResponse]:
    """Health check endpoint.

    Returns:
        HealthCheckResponse with status and version information
    """
    health = HealthCheckResponse(
        status="ok",
        version=settings.app_version,
        environment=settings.environment,
        uptime=request.app.state.clock.uptime(),
    )
    return SuccessResponse[HealthCheckResponse](data=health)


@router.get("/")
async def root(settings: Settings = Depends(get_settings)) -> dict:
    """Describe the service and its top-level endpoints."""
    return {
        "success": True,
        "data": {
            "name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "endpoints": {"health": "/health", "api": "/api"},
        },
    }
