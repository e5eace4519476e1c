"""Pytest configuration for common-py tests."""

import pytest
from users_common.services import InMemoryUserStore, PasswordHasher, UserService


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests with no external services")
    config.addinivalue_line("markers", "integration: marks tests as integration tests that need a live Cosmos DB")


@pytest.fixture
def memory_store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def user_service(memory_store: InMemoryUserStore) -> UserService:
    """User service over an empty in-memory store, with cheap hashing."""
    return UserService(memory_store, PasswordHasher(rounds=4))
