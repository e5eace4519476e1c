"""Cosmos DB infrastructure."""

from users_common.infra.cosmos.cosmos_base import BaseCosmosClient
from users_common.infra.cosmos.cosmos_users_client import (
    USERS_PARTITION_KEY_PATH,
    USERS_UNIQUE_KEY_PATHS,
    CosmosUsersClient,
)

__all__ = ["USERS_PARTITION_KEY_PATH", "USERS_UNIQUE_KEY_PATHS", "BaseCosmosClient", "CosmosUsersClient"]
