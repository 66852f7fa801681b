"""
Authentication routes - signup, login, me, logout.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..auth import AccountService, SessionManager
from ..db import LoginRequest, SessionClaim, SignupRequest
from ..dependencies import get_account_service, get_session_manager, require_auth

router = APIRouter(prefix="/api")


@router.post("/signup", status_code=201)
async def signup(
    body: SignupRequest,
    accounts: AccountService = Depends(get_account_service),
):
    """Create an account. Does not log the user in."""
    user = await accounts.signup(body.name, body.email, body.password)
    return JSONResponse(
        status_code=201,
        content={"ok": True, "user": user.model_dump()}
    )


@router.post("/login")
async def login(
    body: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """Check credentials and set the session cookie."""
    token, user = await accounts.login(body.email, body.password)
    response = JSONResponse(content={"ok": True, "user": user.model_dump()})
    session_manager.set_cookie(response, token)
    return response


@router.get("/me")
async def me(
    claim: SessionClaim = Depends(require_auth),
    accounts: AccountService = Depends(get_account_service),
):
    """Return the identity behind the session cookie."""
    user = await accounts.current_user(claim)
    return {"ok": True, "user": user.model_dump()}


@router.post("/logout")
async def logout(
    accounts: AccountService = Depends(get_account_service),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """Handle logout. The token is not revoked, only the cookie is cleared."""
    response = JSONResponse(content=await accounts.logout())
    session_manager.clear_cookie(response)
    return response
