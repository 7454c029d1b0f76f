"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Storage failures surface as DatabaseError; repositories never return error values

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - update/delete return bool (row matched) so callers can tell "not found"
      apart from success
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from invoicer.core.domain_types import Cents, CustomerId, InvoiceId, InvoiceStatus, UserId


@dataclass(frozen=True)
class UserIdentity:
    """What a successful sign-in yields. Stored in the session by id only."""
    id: UserId
    name: str
    email: str


class InvoiceRepository(Protocol):
    """Contract for invoice persistence — implemented by shell."""
    async def insert(
        self, customer_id: CustomerId, amount_cents: Cents,
        status: InvoiceStatus, date: str,
    ) -> InvoiceId: ...
    async def update(
        self, invoice_id: InvoiceId, customer_id: CustomerId,
        amount_cents: Cents, status: InvoiceStatus, date: str | None,
    ) -> bool: ...
    async def delete(self, invoice_id: InvoiceId) -> bool: ...
    async def customer_exists(self, customer_id: CustomerId) -> bool: ...


class ViewCache(Protocol):
    """Contract for cached page payloads keyed by path."""
    def invalidate(self, path: str) -> None: ...


class IdentityProvider(Protocol):
    """Contract for credential verification — implemented by shell."""
    async def sign_in(
        self, provider_name: str, credentials: Mapping[str, object],
    ) -> UserIdentity: ...
