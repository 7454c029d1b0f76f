"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - InvoiceId wraps UUID, CustomerId wraps str — never mix the two in domain logic
    - Cents is always an integer count of minor currency units
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and compare equal to form values without conversion
"""

from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

InvoiceId = NewType("InvoiceId", UUID)
CustomerId = NewType("CustomerId", str)
UserId = NewType("UserId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

Cents = NewType("Cents", int)


# ─── Enums ───────────────────────────────────────────────────────

class InvoiceStatus(str, Enum):
    """Invoice payment states — maps to DB `status` column."""
    PENDING = "pending"
    PAID = "paid"


class InvoiceAction(str, Enum):
    """Mutations that go through the validator. Value is used in user messages."""
    CREATE = "Create"
    UPDATE = "Update"


class AuthFailureType(str, Enum):
    """Identity provider failure kinds."""
    CREDENTIALS_SIGNIN = "CredentialsSignin"
    CONFIGURATION = "Configuration"
    ACCESS_DENIED = "AccessDenied"


# ─── Money ───────────────────────────────────────────────────────

_CENT = Decimal("1")


def to_cents(amount: Decimal) -> Cents:
    """Scale a major-unit amount to integer cents, rounding half up.

    Decimal arithmetic keeps two-decimal amounts exact: 19.99 -> 1999.
    """
    return Cents(int((amount * 100).quantize(_CENT, rounding=ROUND_HALF_UP)))


def format_currency(cents: int) -> str:
    """Render cents as a dollar string, e.g. 1999 -> '$19.99'."""
    dollars = (Decimal(cents) / 100).quantize(Decimal("0.01"))
    return f"${dollars:,}"
