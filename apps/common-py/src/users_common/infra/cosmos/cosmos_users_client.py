"""Cosmos DB client for user documents."""

import logging

from azure.cosmos import ContainerProxy

from users_common.config.store_config import StoreConfig
from users_common.infra.cosmos.cosmos_base import BaseCosmosClient
from users_common.models.user import USERS_PARTITION, UserDocument

logger = logging.getLogger(__name__)

USERS_PARTITION_KEY_PATH = "/pk"
USERS_UNIQUE_KEY_PATHS = ("/email",)


class CosmosUsersClient(BaseCosmosClient[UserDocument]):
    """Infrastructure layer: Cosmos DB client for user documents.

    All users share one logical partition, because Cosmos DB unique keys are
    scoped to a logical partition and ``/email`` must be unique container-wide.
    """

    def __init__(
        self,
        config: StoreConfig | None = None,
        container_name: str | None = None,
        container: ContainerProxy | None = None,
    ) -> None:
        """Initialize Cosmos users client.

        Args:
            config: Store configuration. If None, will load from environment.
            container_name: Container name. If None, uses config.cosmos_users_container.
            container: Pre-built container proxy
        """
        if config is None and container is None:
            from users_common.config.store_config import get_store_config

            config = get_store_config()

        name = container_name or (config.cosmos_users_container if config else "users")
        super().__init__(
            container_name=name,
            partition_key_path=USERS_PARTITION_KEY_PATH,
            config=config,
            container=container,
        )

    def _get_partition_key(self) -> str:
        return USERS_PARTITION
