"""Route Dependencies — wires request-scoped services from the DB session.

Invariants:
    - One AsyncSession per request, shared by every service built for it
    - Services receive their collaborators explicitly (no module globals inside services)
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from invoicer.config import get_settings
from invoicer.core.session_state import SessionState
from invoicer.infrastructure.credentials_provider import CredentialsProvider
from invoicer.infrastructure.database import get_db
from invoicer.infrastructure.invoice_repository import SqlInvoiceRepository
from invoicer.infrastructure.view_cache import InMemoryViewCache, get_view_cache
from invoicer.services.invoice_actions import InvoiceActions


def get_invoice_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlInvoiceRepository:
    return SqlInvoiceRepository(db)


def get_invoice_actions(
    repo: SqlInvoiceRepository = Depends(get_invoice_repository),
    cache: InMemoryViewCache = Depends(get_view_cache),
) -> InvoiceActions:
    return InvoiceActions(repo, cache, invoices_path=get_settings().invoices_path)


def get_identity_provider(
    db: AsyncSession = Depends(get_db),
) -> CredentialsProvider:
    return CredentialsProvider(db)


def get_session_state(request: Request) -> SessionState:
    return SessionState.from_mapping(request.session)
