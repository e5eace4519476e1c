"""Cosmos DB initialization service."""

import logging

from azure.cosmos import CosmosClient, PartitionKey, exceptions
from azure.identity import DefaultAzureCredential
from users_api.config import Settings
from users_common.infra.cosmos import USERS_PARTITION_KEY_PATH, USERS_UNIQUE_KEY_PATHS

logger = logging.getLogger(__name__)


class CosmosDbInitializer:
    """Initialize Cosmos DB database and the users container if they don't exist."""

    def __init__(self, settings: Settings):
        """Initialize the Cosmos DB client.

        Args:
            settings: Application settings with Cosmos DB configuration
        """
        self.settings = settings
        self.client: CosmosClient | None = None
        self.database = None

    def connect(self) -> None:
        """Create connection to Cosmos DB."""
        if not self.settings.azure_cosmosdb_endpoint:
            logger.warning("Cosmos DB endpoint not configured. Skipping initialization.")
            return

        credential = self.settings.azure_cosmosdb_key or DefaultAzureCredential()
        self.client = CosmosClient(url=self.settings.azure_cosmosdb_endpoint, credential=credential)
        logger.info("Connected to Cosmos DB at %s", self.settings.azure_cosmosdb_endpoint)

    def initialize_database(self) -> None:
        """Create database if it doesn't exist."""
        if not self.client:
            return

        self.database = self.client.create_database_if_not_exists(id=self.settings.database_name)
        logger.info("Database '%s' initialized", self.settings.database_name)

    def initialize_containers(self) -> None:
        """Create the users container with its unique-key policy if it doesn't exist.

        The unique-key policy can only be set at creation time; an existing
        container keeps whatever policy it was created with.
        """
        if not self.database:
            return

        # Emulator typically requires provisioned throughput; use 400 only for localhost
        is_emulator = (
            bool(self.settings.azure_cosmosdb_endpoint) and "localhost" in self.settings.azure_cosmosdb_endpoint.lower()
        )

        kwargs = {
            "id": self.settings.cosmos_users_container,
            "partition_key": PartitionKey(path=USERS_PARTITION_KEY_PATH),
            "unique_key_policy": {"uniqueKeys": [{"paths": [path]} for path in USERS_UNIQUE_KEY_PATHS]},
        }
        if is_emulator:
            kwargs["offer_throughput"] = 400

        try:
            self.database.create_container_if_not_exists(**kwargs)
            logger.info(
                "Container '%s' initialized with partition key '%s' and unique keys %s",
                self.settings.cosmos_users_container,
                USERS_PARTITION_KEY_PATH,
                list(USERS_UNIQUE_KEY_PATHS),
            )
        except exceptions.CosmosResourceExistsError:
            logger.info("Container '%s' already exists", self.settings.cosmos_users_container)

    def initialize(self) -> None:
        """Run full initialization: connect, create database and containers."""
        self.connect()
        self.initialize_database()
        self.initialize_containers()
        logger.info("Cosmos DB initialization completed successfully")


async def initialize_cosmos_db(settings: Settings) -> None:
    """Initialize Cosmos DB during application startup.

    Args:
        settings: Application settings
    """
    initializer = CosmosDbInitializer(settings)
    try:
        initializer.initialize()
    except Exception as e:
        logger.error("Failed to initialize Cosmos DB: %s", e)
        if settings.environment == "production":
            raise
        # In development, log warning but allow app to continue
        logger.warning("Continuing without Cosmos DB initialization (development mode)")
