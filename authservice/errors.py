"""
Error taxonomy for the authentication core.

Every designed failure is an ``AuthError`` subclass carrying a stable
``kind`` (reported to clients) and the HTTP status the routing layer
answers with. Anything else that escapes is reported as ``ServerError``.
"""

from typing import Optional


class AuthError(Exception):
    """Base exception for designed authentication failures."""

    kind = "ServerError"
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"ok": False, "error": self.kind, "message": self.message}


class MissingField(AuthError):
    """A required field was absent or blank."""
    kind = "MissingField"
    status_code = 400
    default_message = "Missing required field"


class WeakPassword(AuthError):
    """Password shorter than the configured minimum."""
    kind = "WeakPassword"
    status_code = 400
    default_message = "Password is too short"


class InvalidInput(AuthError):
    """Malformed input handed to the credential hasher."""
    kind = "InvalidInput"
    status_code = 400
    default_message = "Invalid input"


class DuplicateEmail(AuthError):
    kind = "DuplicateEmail"
    status_code = 409
    default_message = "Email already registered"


class InvalidCredentials(AuthError):
    """Unknown email or wrong password. The two are never distinguished."""
    kind = "InvalidCredentials"
    status_code = 401
    default_message = "Invalid credentials"


class Unauthorized(AuthError):
    """Missing, invalid or expired session."""
    kind = "Unauthorized"
    status_code = 401
    default_message = "Unauthorized"


class ServerError(AuthError):
    pass


class TokenError(Exception):
    """Base exception for session token verification failures."""
    pass


class InvalidToken(TokenError):
    """Signature mismatch or undecodable payload."""
    pass


class ExpiredToken(TokenError):
    """Correctly signed token past its expiry."""
    pass
