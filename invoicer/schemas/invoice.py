"""Invoice Schemas — response payloads for dashboard pages and form actions.

Invariants:
    - ActionStateResponse mirrors core ActionState minus the redirect (routes turn
      redirects into 303s before a body is ever built)
    - amount is always integer cents; amount_display is derived, never parsed back

Design Decisions:
    - Literal for status: Pydantic rejects anything outside pending/paid on the way out
    - from_row helpers keep ORM -> schema mapping out of route bodies
"""

from datetime import date
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from invoicer.core.action_state import ActionState
from invoicer.core.domain_types import format_currency
from invoicer.models.customer import Customer
from invoicer.models.invoice import Invoice


class ActionStateResponse(BaseModel):
    """Form action result — re-displayed next to the form."""
    message: str | None = None
    errors: dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def from_state(cls, state: ActionState) -> "ActionStateResponse":
        return cls(message=state.message, errors=state.errors)


class InvoiceRow(BaseModel):
    """One row of the invoices table."""
    id: UUID
    customer_id: str
    name: str
    email: str
    image_url: str | None = None
    amount: int
    amount_display: str
    status: Literal["pending", "paid"]
    date: date

    @classmethod
    def from_row(cls, invoice: Invoice, customer: Customer) -> "InvoiceRow":
        return cls(
            id=invoice.id,
            customer_id=customer.id,
            name=customer.name,
            email=customer.email,
            image_url=customer.image_url,
            amount=invoice.amount,
            amount_display=format_currency(invoice.amount),
            status=invoice.status,
            date=invoice.date,
        )


class InvoiceListResponse(BaseModel):
    invoices: list[InvoiceRow]
    query: str = ""
    page: int = Field(ge=1)
    total_pages: int = Field(ge=0)


class InvoiceForm(BaseModel):
    """Edit form prefill — amount back in major units, as the form expects."""
    id: UUID
    customer_id: str
    amount: float
    status: Literal["pending", "paid"]
    date: date

    @classmethod
    def from_invoice(cls, invoice: Invoice) -> "InvoiceForm":
        return cls(
            id=invoice.id,
            customer_id=invoice.customer_id,
            amount=invoice.amount / 100,
            status=invoice.status,
            date=invoice.date,
        )


class CustomerOption(BaseModel):
    id: str
    name: str


class CardData(BaseModel):
    """Dashboard overview cards."""
    number_of_invoices: int
    number_of_customers: int
    total_paid_invoices: str
    total_pending_invoices: str

    @classmethod
    def from_totals(cls, totals: dict) -> "CardData":
        return cls(
            number_of_invoices=totals["number_of_invoices"],
            number_of_customers=totals["number_of_customers"],
            total_paid_invoices=format_currency(totals["total_paid_cents"]),
            total_pending_invoices=format_currency(totals["total_pending_cents"]),
        )
