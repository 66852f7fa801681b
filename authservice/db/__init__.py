"""
Storage package - in-memory only.
"""

from .models import (
    UserRecord, UserPublic, SessionClaim, SignupRequest, LoginRequest,
    normalize_email
)
from .memory import InMemoryUserStore

__all__ = [
    "InMemoryUserStore",
    "UserRecord",
    "UserPublic",
    "SessionClaim",
    "SignupRequest",
    "LoginRequest",
    "normalize_email",
]
