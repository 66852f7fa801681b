"""
FastAPI dependency injection.
Components are built once per app and kept on ``app.state``.
"""

import logging

from fastapi import FastAPI, Request

from .auth import AccountService, PasswordHasher, SessionManager, authenticate
from .auth.session import token_from_cookies
from .config import DEFAULT_SESSION_SECRET, Settings
from .db import InMemoryUserStore, SessionClaim

logger = logging.getLogger(__name__)


def init_dependencies(app: FastAPI, settings: Settings) -> None:
    """Build the store, hasher, session manager and account service. Called on startup."""
    if settings.is_production and settings.session_secret == DEFAULT_SESSION_SECRET:
        logger.warning("Running in production with the default session secret")

    store = InMemoryUserStore()
    session_manager = SessionManager(
        settings.session_secret,
        max_age=settings.session_max_age,
        secure=settings.is_production,
    )
    app.state.session_manager = session_manager
    app.state.accounts = AccountService(
        store=store,
        hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
        session_manager=session_manager,
        min_password_length=settings.min_password_length,
    )


async def close_dependencies(app: FastAPI) -> None:
    """Drop references on shutdown. In-memory users are lost."""
    accounts = getattr(app.state, "accounts", None)
    if accounts is not None:
        users = await accounts.store.list_users()
        logger.info(f"Discarding {len(users)} in-memory users")
    app.state.accounts = None
    app.state.session_manager = None


def get_account_service(request: Request) -> AccountService:
    """Get the account service instance."""
    accounts = getattr(request.app.state, "accounts", None)
    if accounts is None:
        raise RuntimeError("Account service not initialized")
    return accounts


def get_session_manager(request: Request) -> SessionManager:
    """Get the session manager instance."""
    session_manager = getattr(request.app.state, "session_manager", None)
    if session_manager is None:
        raise RuntimeError("Session manager not initialized")
    return session_manager


async def require_auth(request: Request) -> SessionClaim:
    """
    Dependency that requires a valid session cookie.
    Attaches the claim to ``request.state.session``.
    """
    claim = authenticate(get_session_manager(request), token_from_cookies(request.cookies))
    request.state.session = claim
    return claim
