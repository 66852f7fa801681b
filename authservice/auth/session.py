"""
Signed, self-expiring session tokens carried in a cookie.
"""

import logging
import time
from typing import Callable, Optional

from fastapi import Response
from itsdangerous import URLSafeTimedSerializer, BadData, BadSignature, SignatureExpired
from itsdangerous.encoding import base64_decode, base64_encode

from ..db import SessionClaim
from ..errors import ExpiredToken, InvalidToken

logger = logging.getLogger(__name__)

# Session duration: 24 hours
SESSION_MAX_AGE = 24 * 60 * 60  # seconds
SESSION_COOKIE_NAME = "token"
SESSION_SALT = "authservice.session.v1"


def _has_canonical_signature(token: str) -> bool:
    """
    Reject signatures whose base64 text is not the one the signer produces.

    The last character of an unpadded base64 signature carries unused bits
    that decoding ignores, so several spellings decode to the same bytes.
    """
    signature = token.rsplit(".", 1)[-1]
    try:
        return base64_encode(base64_decode(signature)) == signature.encode("ascii")
    except (BadData, UnicodeEncodeError):
        return False


class SessionManager:
    """Issues and verifies signed session tokens. Holds no session state."""

    def __init__(
        self,
        secret_key: str,
        max_age: int = SESSION_MAX_AGE,
        secure: bool = False,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize session manager.

        Args:
            secret_key: Secret key for signing tokens
            max_age: Token lifetime in seconds
            secure: Only send the cookie over HTTPS
            clock: Source of the current unix time
        """
        self._serializer = URLSafeTimedSerializer(secret_key, salt=SESSION_SALT)
        self.max_age = max_age
        self.secure = secure
        self._clock = clock

    def issue(self, claim: SessionClaim) -> str:
        """
        Sign a claim into a token valid for ``max_age`` seconds.

        The payload carries issuance and expiry times; the signer adds its
        own timestamp. All of it is covered by the signature.
        """
        issued_at = int(self._clock())
        session_data = {
            "email": claim.email,
            "name": claim.name,
            "iat": issued_at,
            "exp": issued_at + self.max_age,
        }
        return self._serializer.dumps(session_data)

    def verify(self, token: str) -> SessionClaim:
        """
        Verify a token and return its claim.

        The signature is checked before any expiry check, so a forged token
        is always reported as invalid.

        Raises:
            InvalidToken: bad signature or undecodable payload
            ExpiredToken: valid signature, past its expiry
        """
        if not token or not isinstance(token, str):
            raise InvalidToken("Empty token")

        if not _has_canonical_signature(token):
            raise InvalidToken("Bad signature")

        try:
            session_data = self._serializer.loads(token, max_age=self.max_age)
        except SignatureExpired:
            raise ExpiredToken("Session expired")
        except BadSignature:
            raise InvalidToken("Bad signature")

        if not isinstance(session_data, dict):
            raise InvalidToken("Malformed payload")

        expires_at = session_data.get("exp")
        email = session_data.get("email")
        name = session_data.get("name")
        if not isinstance(expires_at, int) or not isinstance(email, str) or not email:
            raise InvalidToken("Malformed payload")
        if name is not None and not isinstance(name, str):
            raise InvalidToken("Malformed payload")

        if self._clock() > expires_at:
            raise ExpiredToken("Session expired")

        return SessionClaim(email=email, name=name)

    def set_cookie(self, response: Response, token: str) -> None:
        """Attach the session token to a response as an HTTP-only cookie."""
        response.set_cookie(
            key=SESSION_COOKIE_NAME,
            value=token,
            max_age=self.max_age,
            httponly=True,  # Not accessible via JavaScript
            samesite="lax",
            secure=self.secure,
            path="/",
        )

    def clear_cookie(self, response: Response) -> None:
        """
        Clear the session cookie.

        The token itself stays valid until it expires; the client just
        stops sending it.
        """
        response.delete_cookie(
            key=SESSION_COOKIE_NAME,
            httponly=True,
            samesite="lax",
            secure=self.secure,
            path="/",
        )


def token_from_cookies(cookies: dict) -> Optional[str]:
    return cookies.get(SESSION_COOKIE_NAME) or None
