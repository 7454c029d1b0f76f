"""Auth Routes — landing page, login form, logout.

Invariants:
    - POST /login stores only the user id in the session, and only on success
    - Auth failures answer 401 with the classified message; other errors propagate
      to the global handlers
    - callbackUrl is honored only for same-site relative paths
    - Logout lives under the protected prefix, so only signed-in users reach it

Design Decisions:
    - Form bodies read via request.form(): the login form posts urlencoded fields,
      and unknown extra fields are ignored rather than rejected
    - 303 after POST: browsers follow with GET
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from invoicer.api.dependencies import get_identity_provider
from invoicer.config import get_settings
from invoicer.core.session_state import SESSION_USER_KEY
from invoicer.infrastructure.credentials_provider import CredentialsProvider
from invoicer.schemas.auth import LoginFailure, LoginPage
from invoicer.services.authenticate import authenticate

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


def safe_callback(url: str | None, default: str) -> str:
    """Only local absolute paths; anything else falls back to default."""
    if url and url.startswith("/") and not url.startswith("//"):
        return url
    return default


@router.get("/")
async def landing_page():
    return {"page": "home", "login": get_settings().login_path}


@router.get("/login", response_model=LoginPage)
async def login_page(request: Request):
    return LoginPage(callback_url=request.query_params.get("callbackUrl"))


@router.post("/login")
async def login(
    request: Request,
    provider: CredentialsProvider = Depends(get_identity_provider),
):
    """Authenticate the login form and start a session."""
    settings = get_settings()
    form = await request.form()
    credentials = {k: v for k, v in form.items() if isinstance(v, str)}

    outcome = await authenticate(provider, credentials)
    if outcome.user is None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=LoginFailure(message=outcome.message).model_dump(),
        )

    request.session.clear()
    request.session[SESSION_USER_KEY] = str(outcome.user.id)
    target = safe_callback(
        credentials.get("redirectTo") or request.query_params.get("callbackUrl"),
        settings.dashboard_home,
    )
    return RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)


@router.post("/dashboard/logout")
async def logout(request: Request):
    request.session.clear()
    return RedirectResponse(
        get_settings().login_path, status_code=status.HTTP_303_SEE_OTHER,
    )
