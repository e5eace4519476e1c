"""In-memory user store for local development and tests."""

import logging
import threading
from typing import Any

from users_common.exceptions import DuplicateKeyError
from users_common.models.user import User, UserDocument
from users_common.query import UserQuery
from users_common.services.user_store import UserStore

logger = logging.getLogger(__name__)


class InMemoryUserStore(UserStore):
    """Stores users in process memory.

    Mirrors the Cosmos store: documents keyed by id plus a unique email index,
    guarded by a lock so each write is atomic with respect to the index.
    """

    def __init__(self) -> None:
        self._documents: dict[str, UserDocument] = {}
        self._ids_by_email: dict[str, str] = {}
        self._lock = threading.Lock()

    def insert(self, document: UserDocument) -> User:
        with self._lock:
            if document.email in self._ids_by_email or document.id in self._documents:
                raise DuplicateKeyError()
            self._documents[document.id] = document
            self._ids_by_email[document.email] = document.id
        logger.info("Created user %s", document.id)
        return document.to_public()

    def get(self, user_id: str) -> User | None:
        document = self._documents.get(user_id)
        return document.to_public() if document else None

    def update(self, user_id: str, changes: dict[str, Any]) -> User | None:
        with self._lock:
            existing = self._documents.get(user_id)
            if existing is None:
                return None
            new_email = changes.get("email", existing.email)
            owner = self._ids_by_email.get(new_email)
            if owner is not None and owner != user_id:
                raise DuplicateKeyError()

            updated = UserDocument.model_validate({**existing.model_dump(by_alias=True), **changes})
            self._documents[user_id] = updated
            if new_email != existing.email:
                del self._ids_by_email[existing.email]
                self._ids_by_email[new_email] = user_id
        logger.info("Updated user %s", user_id)
        return updated.to_public()

    def delete(self, user_id: str) -> User | None:
        with self._lock:
            document = self._documents.pop(user_id, None)
            if document is None:
                return None
            del self._ids_by_email[document.email]
        logger.info("Deleted user %s", user_id)
        return document.to_public()

    def find(self, query: UserQuery) -> tuple[list[User], int]:
        with self._lock:
            documents = list(self._documents.values())
        matched = [d for d in documents if query.matches(d.model_dump(by_alias=True))]
        matched.sort(key=lambda d: d.created_at, reverse=True)
        page = matched[query.skip : query.skip + query.take]
        return [d.to_public() for d in page], len(matched)

    def count(self, active: bool | None = None) -> int:
        with self._lock:
            documents = list(self._documents.values())
        if active is None:
            return len(documents)
        return sum(1 for d in documents if d.is_active == active)

    def clear(self) -> int:
        with self._lock:
            deleted = len(self._documents)
            self._documents.clear()
            self._ids_by_email.clear()
        logger.info("Cleared %d users", deleted)
        return deleted
