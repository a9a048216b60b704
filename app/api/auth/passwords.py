"""
Password hashing.
Owns: One-way credential hashing and verification (bcrypt).
"""

import logging

import bcrypt

from app.api.errors import HashingException

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10

# bcrypt only consumes the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """
    Salted, adaptive-cost password hashing.

    The cost factor is stored inside each hash, so raising ``rounds``
    later does not invalidate existing hashes.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self._placeholder_hash: str | None = None

    def hash(self, plaintext: str) -> str:
        """
        Hash a plaintext password.

        Raises:
            HashingException: The bcrypt backend failed
        """
        try:
            hashed = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds))
        except (ValueError, TypeError) as e:
            logger.error("Password hashing failed", extra={"error": type(e).__name__})
            raise HashingException("Failed to hash password") from e
        return hashed.decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Constant-time check of a candidate password against a stored hash."""
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), hashed.encode("utf-8"))
        except (ValueError, TypeError):
            # Malformed stored hash or oversized candidate
            return False

    def verify_absent(self, plaintext: str) -> bool:
        """
        Run a full-cost check for an account that does not exist.

        Always returns False. Callers use it so an unknown account takes
        as long to reject as a wrong password.
        """
        if self._placeholder_hash is None:
            self._placeholder_hash = self.hash("placeholder-password")
        self.verify(plaintext, self._placeholder_hash)
        return False
