"""Action State — the uniform return shape of every invoice mutation.

Invariants:
    - Expected failures (validation, storage, not found) are ActionState values, never raised
    - redirect_to is set only on successful create/update; it ends the request
    - errors is empty unless validation failed

Design Decisions:
    - One shape for success and failure: routes map it to a response without
      branching on exception types
    - Messages are module constants so tests compare against the exact strings
"""

from dataclasses import dataclass, field

from invoicer.core.domain_types import InvoiceAction
from invoicer.core.validate_invoice import FieldErrorMap

DELETED_MESSAGE = "Deleted Invoice."


def database_error_message(operation: str) -> str:
    """'Create' -> 'Database Error: Failed to Create Invoice.'"""
    return f"Database Error: Failed to {operation} Invoice."


def not_found_message(operation: str) -> str:
    return f"Invoice Not Found: Failed to {operation} Invoice."


@dataclass(frozen=True)
class ActionState:
    """Outcome of a create/update/delete call."""
    message: str | None = None
    errors: FieldErrorMap = field(default_factory=dict)
    redirect_to: str | None = None
    storage_failed: bool = False
    not_found: bool = False

    @property
    def succeeded(self) -> bool:
        return not (self.errors or self.storage_failed or self.not_found)


def validation_failed(errors: FieldErrorMap, message: str) -> ActionState:
    return ActionState(message=message, errors=errors)


def storage_failed(action: InvoiceAction | str) -> ActionState:
    op = action.value if isinstance(action, InvoiceAction) else action
    return ActionState(message=database_error_message(op), storage_failed=True)


def invoice_not_found(action: InvoiceAction | str) -> ActionState:
    op = action.value if isinstance(action, InvoiceAction) else action
    return ActionState(message=not_found_message(op), not_found=True)
