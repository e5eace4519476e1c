"""Route initialization module."""

from fastapi import APIRouter
from users_api.routes.health import router as health_router
from users_api.routes.stats import router as stats_router
from users_api.routes.users import router as users_router

# Create main API router
api_router = APIRouter(prefix="/api")

# Include sub-routers
api_router.include_router(users_router)
api_router.include_router(stats_router)

# Health and service info live at the root (no /api prefix)
root_router = APIRouter()
root_router.include_router(health_router)


__all__ = ["api_router", "root_router"]
