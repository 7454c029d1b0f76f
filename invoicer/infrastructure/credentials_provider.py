"""Credentials Provider — email/password identity provider backed by the users table.

Invariants:
    - Only the "credentials" provider name is supported; anything else is a
      CONFIGURATION AuthError
    - Malformed credentials, unknown email and wrong password all raise
      AuthError(CREDENTIALS_SIGNIN) — callers cannot tell which one happened
    - Storage failures are NOT AuthErrors: they surface as DatabaseError and propagate

Design Decisions:
    - Shape check before the DB lookup: no query for obviously bad input
"""

import logging
import re
from collections.abc import Mapping

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from invoicer.core.domain_types import AuthFailureType, UserId
from invoicer.core.errors import AuthError, DatabaseError
from invoicer.core.repository_protocols import UserIdentity
from invoicer.infrastructure.passwords import check_password_hash
from invoicer.models.user import User

logger = logging.getLogger(__name__)

CREDENTIALS_PROVIDER = "credentials"
MIN_PASSWORD_LENGTH = 6
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def parse_credentials(credentials: Mapping[str, object]) -> tuple[str, str] | None:
    """Return (email, password) if both are well-formed, else None."""
    email = credentials.get("email")
    password = credentials.get("password")
    if not isinstance(email, str) or not _EMAIL_RE.match(email.strip()):
        return None
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        return None
    return email.strip(), password


class CredentialsProvider:
    """IdentityProvider that checks email + password against stored PBKDF2 hashes."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user(self, email: str) -> User | None:
        try:
            result = await self.db.execute(select(User).where(User.email == email))
        except SQLAlchemyError as e:
            logger.error(f"User lookup failed: {e}")
            raise DatabaseError("Failed to fetch user", "query")
        return result.scalar_one_or_none()

    async def sign_in(
        self, provider_name: str, credentials: Mapping[str, object],
    ) -> UserIdentity:
        if provider_name != CREDENTIALS_PROVIDER:
            raise AuthError(
                AuthFailureType.CONFIGURATION,
                f"Unknown identity provider '{provider_name}'",
            )
        parsed = parse_credentials(credentials)
        if parsed is None:
            raise AuthError(AuthFailureType.CREDENTIALS_SIGNIN, "Malformed credentials")

        email, password = parsed
        user = await self.get_user(email)
        if user is None or not check_password_hash(user.password_hash, password):
            raise AuthError(AuthFailureType.CREDENTIALS_SIGNIN, "Credentials rejected")
        return UserIdentity(id=UserId(user.id), name=user.name, email=user.email)
