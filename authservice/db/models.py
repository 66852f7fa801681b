"""
Pydantic models for users, session claims and request bodies.
Users are held in process memory only.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


def normalize_email(email: str) -> str:
    """Store key for an email address: trimmed and lowercased."""
    return str(email).strip().lower()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRecord(BaseModel):
    """A registered user. Never mutated after signup."""
    model_config = ConfigDict(frozen=True)

    name: str
    email: str  # normalized, unique key
    password_hash: str
    created_at: datetime = Field(default_factory=utcnow)

    def public(self) -> "UserPublic":
        return UserPublic(name=self.name, email=self.email)


class UserPublic(BaseModel):
    """Identity returned to clients."""
    name: str
    email: str


class SessionClaim(BaseModel):
    """Identity payload embedded in a session token."""
    model_config = ConfigDict(frozen=True)

    email: str
    name: Optional[str] = None


class SignupRequest(BaseModel):
    """Input for creating a new account."""
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    """Input for logging in."""
    model_config = ConfigDict(extra="ignore")

    email: Optional[str] = None
    password: Optional[str] = None
