"""Service initialization and dependency injection.

The store and the user service are built once at startup and kept on
``app.state``; request handlers receive them through the dependencies below.
"""

import logging

from fastapi import Request
from users_api.config import Settings
from users_common.config import StoreConfig
from users_common.infra.cosmos import CosmosUsersClient
from users_common.services import CosmosUserStore, InMemoryUserStore, PasswordHasher, UserService, UserStore

logger = logging.getLogger(__name__)


def build_user_store(settings: Settings) -> UserStore:
    """Create the user store selected by ``settings.store_backend``.

    Args:
        settings: Application settings

    Returns:
        UserStore instance
    """
    backend = settings.store_backend.lower()
    if backend == "memory":
        logger.info("Using in-memory user store")
        return InMemoryUserStore()
    if backend != "cosmos":
        raise ValueError(f"Unknown STORE_BACKEND: {settings.store_backend}")

    if not settings.azure_cosmosdb_endpoint:
        raise ValueError("AZURE_COSMOSDB_ENDPOINT is required")

    config = StoreConfig(
        azure_cosmosdb_endpoint=settings.azure_cosmosdb_endpoint,
        azure_cosmosdb_key=settings.azure_cosmosdb_key,
        database_name=settings.database_name,
        cosmos_users_container=settings.cosmos_users_container,
    )
    logger.info("Using Cosmos DB user store (container=%s)", settings.cosmos_users_container)
    return CosmosUserStore(CosmosUsersClient(config=config))


def build_user_service(settings: Settings, store: UserStore | None = None) -> UserService:
    """Create the user service.

    Args:
        settings: Application settings
        store: User store. If None, builds one from settings.

    Returns:
        UserService instance
    """
    return UserService(
        store=store if store is not None else build_user_store(settings),
        hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
    )


def get_user_service(request: Request) -> UserService:
    """Get the user service owned by the running application."""
    return request.app.state.user_service
