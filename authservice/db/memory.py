"""
In-memory user store.
Lives as long as the process; nothing is written to disk.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from ..errors import DuplicateEmail
from .models import UserRecord, normalize_email

logger = logging.getLogger(__name__)


class InMemoryUserStore:
    """User records keyed by normalized email."""

    def __init__(self):
        self._users: Dict[str, UserRecord] = {}
        self._lock = asyncio.Lock()

    async def register(self, email: str, name: str, password_hash: str) -> UserRecord:
        """
        Insert a new user if the normalized email is free.

        The check and the insert happen under one lock, so of two concurrent
        signups for the same address exactly one wins.

        Raises:
            DuplicateEmail: the email already has a record
        """
        key = normalize_email(email)
        async with self._lock:
            if key in self._users:
                raise DuplicateEmail()
            user = UserRecord(name=name, email=key, password_hash=password_hash)
            self._users[key] = user
        logger.debug(f"Registered user {key}")
        return user

    async def lookup(self, email: str) -> Optional[UserRecord]:
        """Exact lookup on the normalized email."""
        return self._users.get(normalize_email(email))

    async def remove(self, email: str) -> bool:
        """Remove a user. Returns False if there was nothing to remove."""
        key = normalize_email(email)
        async with self._lock:
            return self._users.pop(key, None) is not None

    async def list_users(self) -> List[UserRecord]:
        return sorted(self._users.values(), key=lambda u: u.created_at)

    def __len__(self) -> int:
        return len(self._users)

