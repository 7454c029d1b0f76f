"""Authenticate — runs a login form through the identity provider.

Invariants:
    - AuthError is classified into a user-facing message, never re-raised
    - Any other exception (DatabaseError, driver errors) propagates unchanged
    - The provider name is always "credentials"
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from invoicer.core.auth_messages import auth_failure_message
from invoicer.core.errors import AuthError
from invoicer.core.repository_protocols import IdentityProvider, UserIdentity
from invoicer.infrastructure.credentials_provider import CREDENTIALS_PROVIDER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthOutcome:
    """Exactly one of user / message is set."""
    user: UserIdentity | None = None
    message: str | None = None


async def authenticate(
    provider: IdentityProvider, credentials: Mapping[str, object],
) -> AuthOutcome:
    try:
        user = await provider.sign_in(CREDENTIALS_PROVIDER, credentials)
    except AuthError as e:
        logger.warning(
            f"Sign-in rejected: {e.type.value}", extra={"error_code": e.code},
        )
        return AuthOutcome(message=auth_failure_message(e.type))
    logger.info("Signed in", extra={"user_id": user.id})
    return AuthOutcome(user=user)
