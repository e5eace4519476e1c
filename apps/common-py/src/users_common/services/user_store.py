"""User store with Cosmos DB implementation."""

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from azure.core.exceptions import AzureError
from azure.cosmos.exceptions import (
    CosmosAccessConditionFailedError,
    CosmosHttpResponseError,
    CosmosResourceNotFoundError,
)

from users_common.exceptions import DuplicateKeyError, StoreUnavailableError, WriteConflictError
from users_common.infra.cosmos.cosmos_users_client import CosmosUsersClient
from users_common.models.user import User, UserDocument
from users_common.query import USER_PROJECTION, UserQuery

logger = logging.getLogger(__name__)


class UserStore(ABC):
    """Abstract interface for the user store.

    Implementations enforce email uniqueness themselves and never return the
    stored password.
    """

    @abstractmethod
    def insert(self, document: UserDocument) -> User:
        """Insert a new user.

        Raises:
            DuplicateKeyError: If the email is already taken
        """

    @abstractmethod
    def get(self, user_id: str) -> User | None:
        """Get a user by ID."""

    @abstractmethod
    def update(self, user_id: str, changes: dict[str, Any]) -> User | None:
        """Apply changes (wire field names) to a user.

        Returns:
            Updated user, or None if no user has this ID

        Raises:
            DuplicateKeyError: If the new email is already taken
            WriteConflictError: If concurrent writers kept the update from landing
        """

    @abstractmethod
    def delete(self, user_id: str) -> User | None:
        """Delete a user and return its last state, or None if absent."""

    @abstractmethod
    def find(self, query: UserQuery) -> tuple[list[User], int]:
        """Return one page of matching users and the total match count."""

    @abstractmethod
    def count(self, active: bool | None = None) -> int:
        """Count users, optionally only those with the given active flag."""

    @abstractmethod
    def clear(self) -> int:
        """Delete every user. Returns the number deleted."""


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    """Map Cosmos failures onto the store error taxonomy."""
    try:
        yield
    except CosmosHttpResponseError as e:
        if e.status_code == 409:
            raise DuplicateKeyError() from e
        logger.error("Cosmos DB %s failed with status %s: %s", operation, e.status_code, e.message)
        raise StoreUnavailableError() from e
    except AzureError as e:
        logger.error("Cosmos DB %s failed: %s", operation, e, exc_info=True)
        raise StoreUnavailableError() from e


class CosmosUserStore(UserStore):
    """Cosmos DB implementation of UserStore."""

    def __init__(self, client: CosmosUsersClient, max_update_attempts: int = 5) -> None:
        """Initialize Cosmos DB user store.

        Args:
            client: Cosmos users client
            max_update_attempts: Conditional replace attempts before giving up
        """
        self.client = client
        self.max_update_attempts = max_update_attempts
        self.partition_key = client._get_partition_key()
        self._select = ", ".join(f"c.{field}" for field in USER_PROJECTION)

    def _projected(self, user_id: str) -> User | None:
        items = self.client.query_items(
            query=f"SELECT {self._select} FROM c WHERE c.id = @id",
            parameters=[{"name": "@id", "value": user_id}],
            partition_key=self.partition_key,
        )
        return User.model_validate(items[0]) if items else None

    def insert(self, document: UserDocument) -> User:
        with _store_errors("insert"):
            created = self.client.create_item(document)
        logger.info("Created user %s", created["id"])
        return User.model_validate(created)

    def get(self, user_id: str) -> User | None:
        with _store_errors("get"):
            return self._projected(user_id)

    def update(self, user_id: str, changes: dict[str, Any]) -> User | None:
        """Merge changes into the stored document with an ETag-guarded replace.

        A replace that loses to a concurrent write is retried on a fresh read,
        with exponential backoff. A user deleted between read and replace
        counts as missing.
        """
        for attempt in range(self.max_update_attempts):
            with _store_errors("update"):
                found = self.client.read_item_with_etag(user_id, self.partition_key)
                if found is None:
                    return None
                existing, etag = found
                merged = UserDocument.model_validate({**existing, **changes})
                try:
                    replaced = self.client.replace_item(
                        user_id, merged.model_dump(mode="json", by_alias=True), etag=etag
                    )
                except CosmosResourceNotFoundError:
                    logger.info("User %s was deleted during update", user_id)
                    return None
                except CosmosAccessConditionFailedError:
                    # ETag conflict - retry
                    logger.warning("User %s changed during update (attempt %d)", user_id, attempt + 1)
                    if attempt < self.max_update_attempts - 1:
                        time.sleep(0.1 * (2**attempt))
                    continue
            logger.info("Updated user %s", user_id)
            return User.model_validate(replaced)

        raise WriteConflictError()

    def delete(self, user_id: str) -> User | None:
        with _store_errors("delete"):
            snapshot = self._projected(user_id)
            if snapshot is None or not self.client.delete_item(user_id, self.partition_key):
                return None
        logger.info("Deleted user %s", user_id)
        return snapshot

    def find(self, query: UserQuery) -> tuple[list[User], int]:
        page_query, count_query = query.to_cosmos()
        with _store_errors("find"):
            items = self.client.query_items(partition_key=self.partition_key, **page_query)
            counts = self.client.query_items(partition_key=self.partition_key, **count_query)
        total = counts[0] if counts else 0
        return [User.model_validate(item) for item in items], total

    def count(self, active: bool | None = None) -> int:
        query = "SELECT VALUE COUNT(1) FROM c"
        parameters: list[dict[str, Any]] = []
        if active is not None:
            query += " WHERE c.isActive = @active"
            parameters.append({"name": "@active", "value": active})
        with _store_errors("count"):
            counts = self.client.query_items(query=query, parameters=parameters, partition_key=self.partition_key)
        return counts[0] if counts else 0

    def clear(self) -> int:
        deleted = 0
        with _store_errors("clear"):
            ids = self.client.query_items(query="SELECT VALUE c.id FROM c", partition_key=self.partition_key)
            for user_id in ids:
                if self.client.delete_item(user_id, self.partition_key):
                    deleted += 1
        logger.info("Cleared %d users", deleted)
        return deleted
