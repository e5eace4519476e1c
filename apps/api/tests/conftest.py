"""Pytest configuration and fixtures."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from users_api.config import Settings
from users_api.main import create_app
from users_api.services import build_user_service
from users_common.services import InMemoryUserStore, UserService


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests with no external services")


@pytest.fixture
def settings() -> Settings:
    """Settings for an isolated, in-memory application."""
    return Settings(environment="test", store_backend="memory", bcrypt_rounds=4, _env_file=None)


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def service(settings: Settings, store: InMemoryUserStore) -> UserService:
    return build_user_service(settings, store)


@pytest.fixture
def app(settings: Settings, service: UserService) -> FastAPI:
    return create_app(settings, user_service=service)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def create_user(client: TestClient):
    """POST a user and return the created record."""

    def _create(name: str = "John Doe", email: str = "john@example.com", password: str = "password123", **extra):
        response = client.post("/api/users", json={"name": name, "email": email, "password": password, **extra})
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
