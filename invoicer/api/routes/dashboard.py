"""Dashboard Routes — overview cards and the customer picker.

Invariants:
    - Read-only: nothing here writes to storage
    - Both sit under the protected prefix and are reachable only when signed in
"""

from fastapi import APIRouter, Depends

from invoicer.api.dependencies import get_invoice_repository, get_session_state
from invoicer.core.session_state import SessionState
from invoicer.infrastructure.invoice_repository import SqlInvoiceRepository
from invoicer.schemas.invoice import CardData, CustomerOption

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("")
async def overview(
    repo: SqlInvoiceRepository = Depends(get_invoice_repository),
    session: SessionState = Depends(get_session_state),
):
    totals = await repo.card_totals()
    return {
        "user_id": session.user_id,
        "cards": CardData.from_totals(totals).model_dump(),
    }


@router.get("/customers", response_model=list[CustomerOption])
async def list_customers(
    repo: SqlInvoiceRepository = Depends(get_invoice_repository),
):
    customers = await repo.list_customers()
    return [CustomerOption(id=c.id, name=c.name) for c in customers]
