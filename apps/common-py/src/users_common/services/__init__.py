"""Users common services package."""

from users_common.services.memory_store import InMemoryUserStore
from users_common.services.passwords import PasswordHasher
from users_common.services.user_service import UserService
from users_common.services.user_store import CosmosUserStore, UserStore

__all__ = [
    "CosmosUserStore",
    "InMemoryUserStore",
    "PasswordHasher",
    "UserService",
    "UserStore",
]
