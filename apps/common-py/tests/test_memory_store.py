"""Tests for the in-memory user store."""

import threading
import uuid
from datetime import UTC, datetime

import pytest
from users_common.exceptions import DuplicateKeyError
from users_common.models.user import UserDocument
from users_common.services import InMemoryUserStore

pytestmark = pytest.mark.unit


def _document(email: str = "john@example.com", name: str = "John Doe") -> UserDocument:
    now = datetime.now(UTC)
    return UserDocument(
        id=str(uuid.uuid4()),
        name=name,
        email=email,
        password="$2b$04$hash",
        created_at=now,
        updated_at=now,
    )


def test_insert_returns_projection(memory_store: InMemoryUserStore) -> None:
    user = memory_store.insert(_document())

    assert not hasattr(user, "password")
    assert "password" not in user.model_dump(by_alias=True)


def test_concurrent_inserts_with_same_email(memory_store: InMemoryUserStore) -> None:
    outcomes: list[str] = []
    barrier = threading.Barrier(8)

    def insert() -> None:
        barrier.wait()
        try:
            memory_store.insert(_document())
            outcomes.append("ok")
        except DuplicateKeyError:
            outcomes.append("duplicate")

    threads = [threading.Thread(target=insert) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(outcomes) == ["duplicate"] * 7 + ["ok"]
    assert memory_store.count() == 1


def test_update_moves_email_index(memory_store: InMemoryUserStore) -> None:
    user = memory_store.insert(_document("old@example.com"))

    memory_store.update(user.id, {"email": "new@example.com"})

    memory_store.insert(_document("old@example.com", name="Reuses old email"))
    with pytest.raises(DuplicateKeyError):
        memory_store.insert(_document("new@example.com"))


def test_update_missing_returns_none(memory_store: InMemoryUserStore) -> None:
    assert memory_store.update(str(uuid.uuid4()), {"name": "x"}) is None


def test_delete_missing_returns_none(memory_store: InMemoryUserStore) -> None:
    assert memory_store.delete(str(uuid.uuid4())) is None


def test_count_by_active_flag(memory_store: InMemoryUserStore) -> None:
    active = memory_store.insert(_document("a@example.com"))
    memory_store.insert(_document("b@example.com"))
    memory_store.update(active.id, {"isActive": False})

    assert memory_store.count() == 2
    assert memory_store.count(active=True) == 1
    assert memory_store.count(active=False) == 1
