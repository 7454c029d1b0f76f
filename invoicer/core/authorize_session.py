"""Session Authorization — decides whether a request may reach its route.

Invariants:
    - authorize_request is PURE: stateless, no IO, same inputs give the same decision
    - Protected prefix: ALLOW iff authenticated, else DENY
    - Outside the prefix an authenticated user is always redirected to the dashboard
      home (login and landing pages are for signed-out users only)
    - Everything else is ALLOW
    - Prefix matching is a plain startswith, so "/dashboardx" counts as protected

Design Decisions:
    - DENY is distinct from REDIRECT: the caller decides where denied requests go
      (login page with callbackUrl), keeping the decision free of URL building
    - Session state and path are explicit parameters, never read from request globals
"""

from dataclasses import dataclass
from enum import Enum

from invoicer.core.session_state import SessionState


class AccessVerdict(str, Enum):
    ALLOW = "allow"
    DENY = "deny"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class AccessDecision:
    """Gate outcome. target is set only for REDIRECT."""
    verdict: AccessVerdict
    target: str | None = None


ALLOW = AccessDecision(AccessVerdict.ALLOW)
DENY = AccessDecision(AccessVerdict.DENY)


def redirect_to(path: str) -> AccessDecision:
    return AccessDecision(AccessVerdict.REDIRECT, target=path)


def authorize_request(
    session: SessionState,
    requested_path: str,
    *,
    protected_prefix: str = "/dashboard",
    dashboard_home: str = "/dashboard",
) -> AccessDecision:
    """Gate decision for one request."""
    if requested_path.startswith(protected_prefix):
        return ALLOW if session.is_authenticated else DENY
    if session.is_authenticated:
        return redirect_to(dashboard_home)
    return ALLOW


def is_gate_exempt(requested_path: str, exempt_prefixes: list[str]) -> bool:
    """API and static paths bypass the gate entirely."""
    return any(requested_path.startswith(p) for p in exempt_prefixes)
