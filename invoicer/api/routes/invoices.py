"""Invoice Routes — dashboard listing, edit-form fetch, and the three form actions.

Invariants:
    - Form actions hand the raw form mapping to InvoiceActions untouched
    - ActionState → HTTP: redirect 303, field errors 400, not found 404,
      storage failure 503, otherwise 200 with the message
    - The listing is served from the view cache until a mutation invalidates it
    - Cached payloads are JSON-ready dicts, never ORM objects

Design Decisions:
    - POST for update and delete (HTML forms cannot send PUT/DELETE)
    - Cache key is query + page; invalidation drops every variant of the path
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from invoicer.api.dependencies import get_invoice_actions, get_invoice_repository
from invoicer.config import get_settings
from invoicer.core.action_state import ActionState
from invoicer.core.domain_types import InvoiceId
from invoicer.core.errors import ResourceNotFoundError
from invoicer.infrastructure.invoice_repository import SqlInvoiceRepository
from invoicer.infrastructure.view_cache import InMemoryViewCache, get_view_cache
from invoicer.schemas.invoice import (
    ActionStateResponse, InvoiceForm, InvoiceListResponse, InvoiceRow,
)
from invoicer.services.invoice_actions import InvoiceActions

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/dashboard/invoices", tags=["invoices"])


def action_response(state: ActionState):
    """Translate an ActionState into the HTTP response the form expects."""
    if state.redirect_to:
        return RedirectResponse(state.redirect_to, status_code=status.HTTP_303_SEE_OTHER)
    if state.errors:
        code = status.HTTP_400_BAD_REQUEST
    elif state.not_found:
        code = status.HTTP_404_NOT_FOUND
    elif state.storage_failed:
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        code = status.HTTP_200_OK
    return JSONResponse(
        status_code=code,
        content=ActionStateResponse.from_state(state).model_dump(),
    )


async def _form_fields(request: Request) -> dict[str, str]:
    form = await request.form()
    return {k: v for k, v in form.items() if isinstance(v, str)}


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    query: str = Query("", max_length=200),
    page: int = Query(1, ge=1),
    repo: SqlInvoiceRepository = Depends(get_invoice_repository),
    cache: InMemoryViewCache = Depends(get_view_cache),
):
    """Filtered, paginated invoice table."""
    settings = get_settings()
    cache_key = f"{query}|{page}"
    cached = cache.get(settings.invoices_path, cache_key)
    if cached is not None:
        return cached

    rows = await repo.list_filtered(query, page, settings.invoices_page_size)
    total_pages = await repo.count_pages(query, settings.invoices_page_size)
    payload = InvoiceListResponse(
        invoices=[InvoiceRow.from_row(inv, cust) for inv, cust in rows],
        query=query,
        page=page,
        total_pages=total_pages,
    ).model_dump(mode="json")
    cache.put(settings.invoices_path, cache_key, payload)
    return payload


@router.post("")
async def create_invoice(
    request: Request,
    actions: InvoiceActions = Depends(get_invoice_actions),
):
    """Create an invoice from the submitted form."""
    state = await actions.create(await _form_fields(request))
    return action_response(state)


@router.get("/{invoice_id}", response_model=InvoiceForm)
async def get_invoice(
    invoice_id: UUID,
    repo: SqlInvoiceRepository = Depends(get_invoice_repository),
):
    """Invoice data for the edit form."""
    invoice = await repo.get_by_id(InvoiceId(invoice_id))
    if invoice is None:
        raise HTTPException(
            status.HTTP_404_NOT_FOUND,
            detail=ResourceNotFoundError("Invoice", str(invoice_id)).to_response(),
        )
    return InvoiceForm.from_invoice(invoice)


@router.post("/{invoice_id}")
async def update_invoice(
    invoice_id: UUID,
    request: Request,
    actions: InvoiceActions = Depends(get_invoice_actions),
):
    """Update an invoice from the submitted edit form."""
    state = await actions.update(InvoiceId(invoice_id), await _form_fields(request))
    return action_response(state)


@router.post("/{invoice_id}/delete")
async def delete_invoice(
    invoice_id: UUID,
    actions: InvoiceActions = Depends(get_invoice_actions),
):
    """Delete an invoice. No redirect: the caller is already on the listing."""
    state = await actions.delete(InvoiceId(invoice_id))
    return action_response(state)
