"""
Request-time session check.

Turns an optional session token into an authenticated claim, or rejects
with ``Unauthorized``. Tokens are never refreshed here.
"""

import logging
from typing import Optional

from ..db import SessionClaim
from ..errors import ExpiredToken, InvalidToken, Unauthorized
from .session import SessionManager

logger = logging.getLogger(__name__)


def authenticate(session_manager: SessionManager, token: Optional[str]) -> SessionClaim:
    """
    Resolve a session token to its claim.

    Raises:
        Unauthorized: no token, bad signature, or expired
    """
    if not token:
        raise Unauthorized()

    try:
        return session_manager.verify(token)
    except ExpiredToken:
        logger.info("Rejected expired session token")
        raise Unauthorized()
    except InvalidToken:
        logger.warning("Rejected invalid session token")
        raise Unauthorized()
