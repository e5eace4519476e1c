"""Generic base class for Cosmos DB client operations."""

import logging
from typing import Any, Generic, TypeVar

from azure.cosmos import ContainerProxy, CosmosClient
from azure.cosmos.exceptions import CosmosResourceNotFoundError
from azure.identity import DefaultAzureCredential
from pydantic import BaseModel

from users_common.config.store_config import StoreConfig

logger = logging.getLogger(__name__)

COSMOS_SYSTEM_FIELDS = frozenset({"_rid", "_self", "_etag", "_attachments", "_ts"})

T = TypeVar("T", bound=BaseModel)


class BaseCosmosClient(Generic[T]):
    """Infrastructure layer: Generic base class for Cosmos DB client operations."""

    @staticmethod
    def _strip_system_fields(item: dict[str, Any]) -> dict[str, Any]:
        """Remove Cosmos DB system fields from a returned item."""
        return {k: v for k, v in item.items() if k not in COSMOS_SYSTEM_FIELDS}

    def __init__(
        self,
        container_name: str,
        partition_key_path: str = "/id",
        config: StoreConfig | None = None,
        container: ContainerProxy | None = None,
    ) -> None:
        """Initialize Cosmos DB client.

        Args:
            container_name: Container name
            partition_key_path: Partition key path (default: "/id")
            config: Store configuration. If None, will load from environment.
            container: Pre-built container proxy; skips client construction
        """
        self.container_name = container_name
        self.partition_key_path = partition_key_path

        if container is not None:
            self.container = container
            return

        if config is None:
            from users_common.config.store_config import get_store_config

            config = get_store_config()

        self.config = config

        if not config.azure_cosmosdb_endpoint:
            raise ValueError("AZURE_COSMOSDB_ENDPOINT is required")

        if config.azure_cosmosdb_key:
            # Use key-based authentication
            self.client = CosmosClient(url=config.azure_cosmosdb_endpoint, credential=config.azure_cosmosdb_key)
        else:
            # Use managed identity
            credential = DefaultAzureCredential()
            self.client = CosmosClient(url=config.azure_cosmosdb_endpoint, credential=credential)

        self.database = self.client.get_database_client(config.database_name)
        self.container = self.database.get_container_client(container_name)

    def create_item(self, item: T) -> dict[str, Any]:
        """Create an item in Cosmos DB.

        Args:
            item: Pydantic model instance to create

        Returns:
            Created item as dictionary (with Cosmos system fields removed)

        Raises:
            CosmosResourceExistsError: If the id or a unique key already exists
        """
        item_dict = item.model_dump(mode="json", by_alias=True)
        created = self.container.create_item(body=item_dict)
        logger.info("Created item %s in container %s", created["id"], self.container_name)
        return self._strip_system_fields(created)

    def read_item_with_etag(self, item_id: str, partition_key: str) -> tuple[dict[str, Any], str] | None:
        """Read a full item together with its ETag.

        Returns:
            (item without Cosmos system fields, ETag), or None if not found
        """
        try:
            item = self.container.read_item(item=item_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            logger.debug("Item %s not found in container %s", item_id, self.container_name)
            return None
        return self._strip_system_fields(item), item["_etag"]

    def replace_item(self, item_id: str, body: dict[str, Any], etag: str | None = None) -> dict[str, Any]:
        """Replace an item in Cosmos DB (full replace).

        Args:
            item_id: Item ID
            body: Complete new document
            etag: When given, replace only if the stored item still has this ETag

        Returns:
            Replaced item as dictionary (with Cosmos system fields removed)

        Raises:
            CosmosAccessConditionFailedError: If the ETag no longer matches
            CosmosResourceNotFoundError: If the item no longer exists
        """
        if etag is not None:
            replaced = self.container.replace_item(item=item_id, body=body, if_match=etag)
        else:
            replaced = self.container.replace_item(item=item_id, body=body)
        logger.info("Replaced item %s in container %s", item_id, self.container_name)
        return self._strip_system_fields(replaced)

    def query_items(
        self,
        query: str,
        parameters: list[dict[str, Any]] | None = None,
        partition_key: str | None = None,
    ) -> list[Any]:
        """Query items from Cosmos DB.

        Args:
            query: SQL query string
            parameters: Query parameters
            partition_key: Partition key; cross-partition query when omitted

        Returns:
            List of query results
        """
        if partition_key is not None:
            items = list(self.container.query_items(query=query, parameters=parameters, partition_key=partition_key))
        else:
            items = list(
                self.container.query_items(query=query, parameters=parameters, enable_cross_partition_query=True)
            )
        logger.debug("Queried %d items from container %s", len(items), self.container_name)
        return items

    def delete_item(self, item_id: str, partition_key: str) -> bool:
        """Delete an item from Cosmos DB.

        Args:
            item_id: Item ID
            partition_key: Partition key value

        Returns:
            True if the item was deleted, False if it did not exist
        """
        try:
            self.container.delete_item(item=item_id, partition_key=partition_key)
        except CosmosResourceNotFoundError:
            logger.warning("Item %s not found for deletion in %s", item_id, self.container_name)
            return False
        logger.info("Deleted item %s from container %s", item_id, self.container_name)
        return True
