"""Seed or reset the user store.

Usage:
    python -m users_api.seed           # clear the store, then insert sample users
    python -m users_api.seed --reset   # clear the store only
"""

import argparse
import asyncio
import logging

from users_api.config import Settings, get_settings
from users_api.services import build_user_service
from users_api.services.cosmos_db_init import initialize_cosmos_db
from users_common.models.user import User
from users_common.services.user_service import UserService

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    {"name": "John Doe", "email": "john@example.com", "password": "password123"},
    {"name": "Jane Smith", "email": "jane@example.com", "password": "password123"},
    {"name": "Bob Johnson", "email": "bob@example.com", "password": "password123"},
    {"name": "Alice Brown", "email": "alice@example.com", "password": "password123"},
    {"name": "Charlie Wilson", "email": "charlie@example.com", "password": "password123"},
]


def seed_users(service: UserService, users: list[dict] | None = None) -> list[User]:
    """Clear the store and insert sample users through the regular create path.

    Args:
        service: User service
        users: Raw create payloads. Defaults to SAMPLE_USERS.

    Returns:
        The created users
    """
    service.reset()
    created = [service.create_user(payload) for payload in users or SAMPLE_USERS]
    logger.info("Created %d users", len(created))
    return created


def main(argv: list[str] | None = None, settings: Settings | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed or reset the user store")
    parser.add_argument("--reset", action="store_true", help="only delete all users")
    args = parser.parse_args(argv)

    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    if settings.store_backend.lower() == "cosmos":
        asyncio.run(initialize_cosmos_db(settings))
    service = build_user_service(settings)

    if args.reset:
        service.reset()
        return

    for user in seed_users(service):
        logger.info("  %s <%s>", user.name, user.email)


if __name__ == "__main__":
    main()
