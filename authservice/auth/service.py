"""
Account operations called by the HTTP layer: signup, login, me, logout.
"""

import logging
from typing import Optional, Tuple

from ..db import InMemoryUserStore, SessionClaim, UserPublic, normalize_email
from ..errors import (
    DuplicateEmail, InvalidCredentials, MissingField, Unauthorized, WeakPassword
)
from .guard import authenticate
from .password import PasswordHasher
from .session import SessionManager

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class AccountService:
    """Composes the user store, password hasher and session manager."""

    def __init__(
        self,
        store: InMemoryUserStore,
        hasher: PasswordHasher,
        session_manager: SessionManager,
        min_password_length: int = MIN_PASSWORD_LENGTH,
    ):
        self.store = store
        self.hasher = hasher
        self.session_manager = session_manager
        self.min_password_length = min_password_length

    async def signup(self, name: Optional[str], email: Optional[str], password: Optional[str]) -> UserPublic:
        """
        Register a new user.

        Raises:
            MissingField: name, email or password absent
            WeakPassword: password shorter than the minimum
            DuplicateEmail: normalized email already registered
        """
        if _blank(name) or _blank(email) or not password:
            raise MissingField("name, email, password are required")
        if len(password) < self.min_password_length:
            raise WeakPassword(
                f"Password must be at least {self.min_password_length} characters"
            )

        key = normalize_email(email)
        if await self.store.lookup(key) is not None:
            logger.info(f"Signup rejected, email already registered: {key}")
            raise DuplicateEmail()

        password_hash = await self.hasher.hash(password)
        # register re-checks under its lock; a concurrent signup may have won
        user = await self.store.register(key, name.strip(), password_hash)
        logger.info(f"New user registered: {user.email}")
        return user.public()

    async def login(self, email: Optional[str], password: Optional[str]) -> Tuple[str, UserPublic]:
        """
        Check credentials and issue a session token.

        Raises:
            MissingField: email or password absent
            InvalidCredentials: unknown email or wrong password
        """
        if _blank(email) or not password:
            raise MissingField("email and password are required")

        key = normalize_email(email)
        user = await self.store.lookup(key)
        if user is None:
            # Same cost as a real check, so timing does not reveal unknown emails
            await self.hasher.dummy_verify()
            logger.info("Login failed")
            raise InvalidCredentials()

        if not await self.hasher.verify(password, user.password_hash):
            logger.info("Login failed")
            raise InvalidCredentials()

        token = self.session_manager.issue(SessionClaim(email=user.email, name=user.name))
        logger.info(f"User logged in: {user.email}")
        return token, user.public()

    async def current_user(self, claim: SessionClaim) -> UserPublic:
        """
        Re-resolve an authenticated claim against the store.

        Raises:
            Unauthorized: the user no longer exists
        """
        user = await self.store.lookup(claim.email)
        if user is None:
            logger.info(f"Session for unknown user: {claim.email}")
            raise Unauthorized("User not found")
        return user.public()

    async def me(self, token: Optional[str]) -> UserPublic:
        """
        Identity behind a session token.

        Raises:
            Unauthorized: missing, invalid or expired token, or unknown user
        """
        claim = authenticate(self.session_manager, token)
        return await self.current_user(claim)

    async def logout(self) -> dict:
        """Sessions are not tracked server-side; the caller clears the cookie."""
        return {"ok": True, "message": "Logged out"}
