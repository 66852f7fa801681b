"""
Authentication module.
"""

from .password import PasswordHasher
from .session import SessionManager, SESSION_COOKIE_NAME, SESSION_MAX_AGE
from .guard import authenticate
from .service import AccountService

__all__ = [
    "PasswordHasher",
    "SessionManager",
    "SESSION_COOKIE_NAME",
    "SESSION_MAX_AGE",
    "authenticate",
    "AccountService",
]
