"""Users common models package."""

from users_common.models.user import USERS_PARTITION, User, UserDocument

__all__ = [
    "USERS_PARTITION",
    "User",
    "UserDocument",
]
