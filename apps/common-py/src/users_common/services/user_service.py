"""Service layer: business logic for user operations."""

import logging
import uuid
from datetime import UTC, datetime
from typing import Any

from users_common.exceptions import MalformedRequestError, NotFoundError
from users_common.models.user import User, UserDocument
from users_common.query import Pagination, build_user_query
from users_common.services.passwords import PasswordHasher
from users_common.services.user_store import UserStore
from users_common.validation import validate_create, validate_update

logger = logging.getLogger(__name__)


def parse_user_id(user_id: str) -> str:
    """Check that a user id is a well-formed UUID string.

    Raises:
        MalformedRequestError: If it is not
    """
    try:
        return str(uuid.UUID(user_id))
    except (TypeError, ValueError) as e:
        raise MalformedRequestError("Invalid user id") from e


class UserService:
    """Service layer: validates input, calls the store and returns public users."""

    def __init__(self, store: UserStore, hasher: PasswordHasher | None = None) -> None:
        """Initialize user service.

        Args:
            store: User store
            hasher: Password hasher. If None, uses bcrypt with default rounds.
        """
        self.store = store
        self.hasher = hasher or PasswordHasher()

    def list_users(
        self, page: Any = None, limit: Any = None, search: str | None = None
    ) -> tuple[list[User], Pagination]:
        """List one page of users.

        Args:
            page: Page number, 1-based (default 1)
            limit: Page size (default 10)
            search: Optional free text matched against name or email

        Returns:
            Tuple of users on the page and the pagination descriptor
        """
        query = build_user_query(page, limit, search)
        users, total = self.store.find(query)
        return users, query.pagination(total)

    def get_user(self, user_id: str) -> User:
        user = self.store.get(parse_user_id(user_id))
        if user is None:
            raise NotFoundError(user_id)
        return user

    def create_user(self, payload: Any) -> User:
        """Create a user from a raw request body.

        Raises:
            ValidationError: If the payload breaks a field rule
            DuplicateKeyError: If the email is taken
        """
        record = validate_create(payload)
        now = datetime.now(UTC)
        document = UserDocument(
            id=str(uuid.uuid4()),
            name=record["name"],
            email=record["email"],
            password=self.hasher.hash(record["password"]),
            is_active=record.get("isActive", True),
            created_at=now,
            updated_at=now,
        )
        return self.store.insert(document)

    def update_user(self, user_id: str, payload: Any) -> User:
        """Apply a partial update.

        Raises:
            MalformedRequestError: If the id is not a UUID
            ValidationError: If a supplied field breaks its rule
            NotFoundError: If no user has this id
            DuplicateKeyError: If the new email is taken
        """
        user_id = parse_user_id(user_id)
        changes = validate_update(payload)
        if "password" in changes:
            changes["password"] = self.hasher.hash(changes["password"])
        changes["updatedAt"] = datetime.now(UTC)

        user = self.store.update(user_id, changes)
        if user is None:
            raise NotFoundError(user_id)
        return user

    def delete_user(self, user_id: str) -> User:
        user = self.store.delete(parse_user_id(user_id))
        if user is None:
            raise NotFoundError(user_id)
        return user

    def count_users(self) -> tuple[int, int]:
        """Return ``(total, active)`` user counts."""
        return self.store.count(), self.store.count(active=True)

    def reset(self) -> int:
        """Delete every user."""
        deleted = self.store.clear()
        logger.warning("Deleted all %d users", deleted)
        return deleted
