"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from users_api.config import Settings, get_settings
from users_api.errors import register_exception_handlers
from users_api.middleware import setup_middleware
from users_api.routes import api_router, root_router
from users_api.services import build_user_service
from users_api.services.cosmos_db_init import initialize_cosmos_db
from users_api.services.runtime import ProcessClock
from users_common.services.user_service import UserService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Handle application lifespan events."""
    settings: Settings = app.state.settings

    # Startup
    logger.info("%s v%s started", settings.app_name, settings.app_version)
    logger.info("Environment: %s", settings.environment)
    logger.info("Log level: %s", settings.log_level)

    if app.state.user_service is None:
        if settings.store_backend.lower() == "cosmos":
            logger.info("Initializing Cosmos DB...")
            await initialize_cosmos_db(settings)
        app.state.user_service = build_user_service(settings)

    yield

    # Shutdown
    logger.info("%s shutting down", settings.app_name)


def create_app(settings: Settings | None = None, user_service: UserService | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings. If None, loads from environment.
        user_service: User service to serve requests with. If None, one is
            built from settings at startup.

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Users API - FastAPI backend service",
        version=settings.app_version,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.user_service = user_service
    app.state.clock = ProcessClock()
    app.dependency_overrides[get_settings] = lambda: settings

    # Setup middleware (must be before exception handlers)
    setup_middleware(app, ui_url=settings.ui_url, environment=settings.environment)
    register_exception_handlers(app)

    # Include routers
    app.include_router(api_router)
    app.include_router(root_router)

    return app


# Configure logging
_settings = get_settings()
logging.basicConfig(level=_settings.log_level.upper())

app = create_app(_settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "users_api.main:app",
        host=_settings.api_host,
        port=_settings.api_port,
        reload=True,
        log_level=_settings.log_level.lower(),
    )
