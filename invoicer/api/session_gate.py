"""Session Gate — HTTP middleware that applies authorize_request to every request.

Invariants:
    - Runs inside SessionMiddleware (request.session is already decoded)
    - Exempt prefixes (API, static) skip the gate entirely
    - DENY → 302 to the login page with callbackUrl set to the requested path + query
    - REDIRECT → 302 to the decision target
    - ALLOW → the route runs untouched

Design Decisions:
    - Middleware over per-route Depends: one gate covers every page, new routes
      cannot forget it
    - SessionState built here and passed explicitly; the decision function never
      sees the Request object
"""

import logging
from urllib.parse import urlencode

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from invoicer.config import Settings
from invoicer.core.authorize_session import (
    AccessVerdict, authorize_request, is_gate_exempt,
)
from invoicer.core.session_state import SessionState

logger = logging.getLogger(__name__)


def login_redirect_url(login_path: str, request: Request) -> str:
    callback = request.url.path
    if request.url.query:
        callback = f"{callback}?{request.url.query}"
    return f"{login_path}?{urlencode({'callbackUrl': callback})}"


def register_session_gate(app: FastAPI, settings: Settings) -> None:
    """Install the gate. Must be registered BEFORE SessionMiddleware is added."""

    @app.middleware("http")
    async def session_gate(request: Request, call_next):
        path = request.url.path
        if is_gate_exempt(path, settings.gate_exempt_prefixes):
            return await call_next(request)

        decision = authorize_request(
            SessionState.from_mapping(request.session),
            path,
            protected_prefix=settings.protected_prefix,
            dashboard_home=settings.dashboard_home,
        )
        if decision.verdict == AccessVerdict.DENY:
            logger.info("Unauthenticated request denied", extra={"path": path})
            return RedirectResponse(
                login_redirect_url(settings.login_path, request), status_code=302,
            )
        if decision.verdict == AccessVerdict.REDIRECT:
            return RedirectResponse(decision.target, status_code=302)
        return await call_next(request)
