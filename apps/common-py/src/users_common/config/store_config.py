"""Configuration for the user store."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def _get_env_file_path() -> str:
    """Get the path to the .env file.

    Checks for ENV_FILE environment variable first, then defaults to
    .env in the common-py project directory (apps/common-py/.env).

    Returns:
        Path to the .env file
    """
    env_file = os.getenv("ENV_FILE")
    if env_file:
        return env_file

    # apps/common-py/src/users_common/config/store_config.py -> apps/common-py/
    common_py_dir = Path(__file__).parent.parent.parent.parent
    return str(common_py_dir / ".env")


class StoreConfig(BaseSettings):
    """User store settings from environment variables."""

    # Cosmos DB
    azure_cosmosdb_endpoint: str | None = None
    azure_cosmosdb_key: str | None = None
    database_name: str = "users"
    cosmos_users_container: str = "users"

    model_config = SettingsConfigDict(
        env_file=_get_env_file_path(),
        case_sensitive=False,
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
    )


def get_store_config() -> StoreConfig:
    """Get user store configuration.

    Returns:
        StoreConfig instance
    """
    return StoreConfig()
