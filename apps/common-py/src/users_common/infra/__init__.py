"""Infrastructure layer for external communication."""

from users_common.infra.cosmos.cosmos_base import BaseCosmosClient
from users_common.infra.cosmos.cosmos_users_client import CosmosUsersClient

__all__ = [
    "BaseCosmosClient",
    "CosmosUsersClient",
]
