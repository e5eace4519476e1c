"""Tests for the user service over the in-memory store."""

import uuid

import pytest
from users_common.exceptions import DuplicateKeyError, MalformedRequestError, NotFoundError, ValidationError
from users_common.services import InMemoryUserStore, UserService

pytestmark = pytest.mark.unit


def _create(service: UserService, name: str = "John Doe", email: str = "john@example.com", **extra):
    return service.create_user({"name": name, "email": email, "password": "password123", **extra})


class TestCreate:
    def test_returns_public_user(self, user_service: UserService) -> None:
        user = _create(user_service)

        assert user.name == "John Doe"
        assert user.is_active is True
        assert "password" not in user.model_dump(by_alias=True)

    def test_validation_error_writes_nothing(self, user_service: UserService, memory_store: InMemoryUserStore) -> None:
        with pytest.raises(ValidationError):
            user_service.create_user({"name": "", "email": "john@example.com", "password": "password123"})

        assert memory_store.count() == 0

    def test_duplicate_email(self, user_service: UserService) -> None:
        _create(user_service, email="John@Example.com")

        with pytest.raises(DuplicateKeyError):
            _create(user_service, name="Other", email="john@example.com")


class TestReadUpdateDelete:
    def test_get_round_trip(self, user_service: UserService) -> None:
        created = _create(user_service)

        assert user_service.get_user(created.id) == created

    def test_get_unknown(self, user_service: UserService) -> None:
        with pytest.raises(NotFoundError):
            user_service.get_user(str(uuid.uuid4()))

    @pytest.mark.parametrize("user_id", ["", "123", "not-a-uuid"])
    def test_malformed_id(self, user_service: UserService, user_id: str) -> None:
        with pytest.raises(MalformedRequestError):
            user_service.get_user(user_id)

    def test_update_keeps_id_and_created_at(self, user_service: UserService) -> None:
        created = _create(user_service)

        updated = user_service.update_user(created.id, {"name": "Johnny", "id": "other", "createdAt": "2000-01-01"})

        assert updated.name == "Johnny"
        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert updated.updated_at >= created.updated_at

    def test_update_validates_before_looking_up(self, user_service: UserService) -> None:
        with pytest.raises(ValidationError):
            user_service.update_user(str(uuid.uuid4()), {"email": "nope"})

    def test_update_unknown(self, user_service: UserService) -> None:
        with pytest.raises(NotFoundError):
            user_service.update_user(str(uuid.uuid4()), {"name": "Johnny"})

    def test_delete_then_get(self, user_service: UserService) -> None:
        created = _create(user_service)

        deleted = user_service.delete_user(created.id)

        assert deleted == created
        with pytest.raises(NotFoundError):
            user_service.get_user(created.id)


class TestListAndCount:
    def test_list_pages_newest_first(self, user_service: UserService) -> None:
        for i in range(15):
            _create(user_service, name=f"User {i + 1}", email=f"user{i + 1}@example.com")

        users, pagination = user_service.list_users(page=2, limit=5)

        assert len(users) == 5
        assert (pagination.total, pagination.pages) == (15, 3)
        assert users[0].created_at >= users[-1].created_at

    def test_list_search(self, user_service: UserService) -> None:
        _create(user_service, "John Doe", "john@example.com")
        _create(user_service, "Jane Smith", "jane@example.com")

        users, pagination = user_service.list_users(search="john")

        assert [u.name for u in users] == ["John Doe"]
        assert pagination.total == 1

    def test_counts(self, user_service: UserService) -> None:
        for i in range(3):
            _create(user_service, name=f"User {i}", email=f"user{i}@example.com")
        _create(user_service, name="Idle", email="idle@example.com", isActive=False)

        assert user_service.count_users() == (4, 3)

    def test_reset(self, user_service: UserService) -> None:
        _create(user_service)

        assert user_service.reset() == 1
        assert user_service.count_users() == (0, 0)
