"""
Password hashing with bcrypt (via passlib).

Hashing is CPU-bound, so both operations run in the worker thread pool and
are exposed as coroutines.
"""

import logging

from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext
from passlib.exc import PasswordValueError

from ..errors import InvalidInput

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10


class PasswordHasher:
    """Salted adaptive password hashing."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """
        Initialize the hasher.

        Args:
            rounds: bcrypt cost factor (log2 of the iteration count)
        """
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash_sync(self, password: str) -> str:
        if not isinstance(password, str) or not password:
            raise InvalidInput("Password must be a non-empty string")
        try:
            return self._context.hash(password)
        except PasswordValueError as e:
            # e.g. NUL bytes, which bcrypt cannot represent
            raise InvalidInput(f"Password not accepted: {e}")

    def verify_sync(self, password: str, stored: str) -> bool:
        if not isinstance(password, str) or not isinstance(stored, str):
            return False
        if not password or not stored:
            return False
        try:
            return self._context.verify(password, stored)
        except (ValueError, TypeError):
            # Malformed or unrecognised hash
            logger.warning("Stored password hash could not be parsed")
            return False

    def dummy_verify_sync(self) -> bool:
        """Burn the same time as a real verification. Always False."""
        self._context.dummy_verify()
        return False

    async def hash(self, password: str) -> str:
        """
        Hash a password with a fresh random salt.

        Raises:
            InvalidInput: password is not a non-empty string
        """
        return await run_in_threadpool(self.hash_sync, password)

    async def verify(self, password: str, stored: str) -> bool:
        """Check a plaintext attempt against a stored hash. Never raises on mismatch."""
        return await run_in_threadpool(self.verify_sync, password, stored)

    async def dummy_verify(self) -> bool:
        return await run_in_threadpool(self.dummy_verify_sync)

