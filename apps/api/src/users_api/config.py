"""Configuration management for the Users API."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_env_file_path() -> str:
    """Get the path to the .env file.

    Checks for ENV_FILE environment variable first, then defaults to
    .env in the API project directory (apps/api/.env).

    Returns:
        Path to the .env file
    """
    # Check if ENV_FILE environment variable is set
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return env_file

    # This file is in apps/api/src/users_api/config.py
    # So we go up 3 levels to get to apps/api/
    api_dir = Path(__file__).parent.parent.parent
    return str(api_dir / ".env")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "users-api"
    app_version: str = "1.0.0"
    environment: str = "development"
    log_level: str = "info"

    # API
    api_host: str = "localhost"
    api_port: int = 8000

    # Store: "cosmos" or "memory"
    store_backend: str = "cosmos"

    # Azure Cosmos DB
    azure_cosmosdb_endpoint: str | None = None
    azure_cosmosdb_key: str | None = None
    database_name: str = "users"
    cosmos_users_container: str = "users"

    # Password hashing
    bcrypt_rounds: int = 12

    # UI
    ui_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=_get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
