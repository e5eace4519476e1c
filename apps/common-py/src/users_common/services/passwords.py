"""Password hashing with bcrypt."""

import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """Hashes and verifies passwords with bcrypt."""

    def __init__(self, rounds: int = 12) -> None:
        """Initialize the hasher.

        Args:
            rounds: bcrypt cost factor (4-31)
        """
        self.rounds = rounds

    @staticmethod
    def _encode(password: str) -> bytes:
        password_bytes = password.encode("utf-8")
        if len(password_bytes) > BCRYPT_MAX_BYTES:
            logger.warning("Password exceeds %d bytes, truncating", BCRYPT_MAX_BYTES)
            password_bytes = password_bytes[:BCRYPT_MAX_BYTES]
        return password_bytes

    def hash(self, password: str) -> str:
        """Hash a plain-text password.

        Args:
            password: Plain text password

        Returns:
            bcrypt hash string
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._encode(password), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """Check a plain-text password against a stored hash."""
        return bcrypt.checkpw(self._encode(password), hashed.encode("utf-8"))
