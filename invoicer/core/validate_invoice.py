"""Invoice Form Validation — turns an untrusted form mapping into an InvoiceInput.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - All-or-nothing: every field is checked, and any failure rejects the whole form
    - FieldErrorMap only contains keys for fields that failed
    - amount that cannot be parsed is treated as 0, so it fails the > 0 check
      with the amount message instead of a type error
    - amount must still be > 0 after rounding to cents, so sub-cent values fail too
    - date is passed through as-is; format checking is the caller's job

Design Decisions:
    - Explicit checks over a schema library: each field owns its message and
      coercion rule in one place
    - Tagged result (InvoiceValidation) over exceptions: the error path is a
      normal return value that routes re-display directly
    - Decimal over float: amount feeds to_cents(), which must be exact
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from invoicer.core.domain_types import (
    CustomerId, InvoiceAction, InvoiceStatus, to_cents,
)

FieldErrorMap = dict[str, list[str]]

CUSTOMER_MESSAGE = "Please select a customer."
AMOUNT_MESSAGE = "Please enter an amount greater than $0."
STATUS_MESSAGE = "Please select an invoice status."


@dataclass(frozen=True)
class InvoiceInput:
    """A fully validated invoice form."""
    customer_id: CustomerId
    amount: Decimal
    status: InvoiceStatus
    date: str | None = None


@dataclass(frozen=True)
class InvoiceValidation:
    """Result of validate_invoice_form — data on success, errors otherwise."""
    success: bool
    data: InvoiceInput | None = None
    errors: FieldErrorMap = field(default_factory=dict)
    message: str | None = None


def missing_fields_message(action: InvoiceAction) -> str:
    return f"Missing Fields. Failed to {action.value} Invoice."


def coerce_amount(raw: object) -> Decimal:
    """Coerce a form value to Decimal. Anything unparseable or non-finite becomes 0."""
    if raw is None:
        return Decimal(0)
    try:
        value = Decimal(str(raw).strip() or "0")
    except InvalidOperation:
        return Decimal(0)
    if not value.is_finite():
        return Decimal(0)
    return value


def check_customer_id(raw: object) -> list[str]:
    if not isinstance(raw, str) or not raw.strip():
        return [CUSTOMER_MESSAGE]
    return []


def check_amount(amount: Decimal) -> list[str]:
    """Positive once rounded to cents: 0.004 stores as 0 and is rejected."""
    if amount <= 0:
        return [AMOUNT_MESSAGE]
    try:
        cents = to_cents(amount)
    except InvalidOperation:
        return [AMOUNT_MESSAGE]
    return [] if cents > 0 else [AMOUNT_MESSAGE]


def check_status(raw: object) -> list[str]:
    if raw not in {s.value for s in InvoiceStatus}:
        return [STATUS_MESSAGE]
    return []


def validate_invoice_form(
    raw: Mapping[str, object], action: InvoiceAction,
) -> InvoiceValidation:
    """Validate customerId, amount, status (and pass through date)."""
    customer_id = raw.get("customerId")
    amount = coerce_amount(raw.get("amount"))
    status = raw.get("status")
    date = raw.get("date")

    errors: FieldErrorMap = {}
    for name, problems in (
        ("customerId", check_customer_id(customer_id)),
        ("amount", check_amount(amount)),
        ("status", check_status(status)),
    ):
        if problems:
            errors[name] = problems

    if errors:
        return InvoiceValidation(
            success=False,
            errors=errors,
            message=missing_fields_message(action),
        )

    return InvoiceValidation(
        success=True,
        data=InvoiceInput(
            customer_id=CustomerId(customer_id),
            amount=amount,
            status=InvoiceStatus(status),
            date=date if isinstance(date, str) and date else None,
        ),
    )
