"""Error taxonomy for the Users API.

Each error carries the HTTP status and the short message that the response
envelope exposes to callers. Handlers never build error bodies themselves; the
API layer converts these exceptions once, at the request boundary.
"""

from typing import Any


class UsersError(Exception):
    """Base exception for all Users API errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, details: list[dict[str, Any]] | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Short message shown to the caller
            details: Optional list of ``{field, message}`` violations
        """
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(UsersError):
    """Raised when an incoming payload violates one or more field rules."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, details: list[dict[str, Any]], message: str | None = None) -> None:
        super().__init__(message, details)


class MalformedRequestError(UsersError):
    """Raised when a request body or identifier cannot be parsed."""

    status_code = 400
    default_message = "Malformed request"


class NotFoundError(UsersError):
    """Raised when no user exists for the given id."""

    status_code = 404
    default_message = "User not found"

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__()


class DuplicateKeyError(UsersError):
    """Raised when a write collides with the unique email constraint."""

    status_code = 409
    default_message = "Email already exists"


class WriteConflictError(UsersError):
    """Raised when a user keeps changing underneath a conditional update."""

    status_code = 409
    default_message = "User was modified concurrently"


class StoreUnavailableError(UsersError):
    """Raised when the underlying store cannot be reached.

    The underlying cause is chained and logged, never returned to the caller.
    """

    status_code = 500
    default_message = "Internal server error"
