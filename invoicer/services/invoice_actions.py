"""Invoice Actions — validate, persist, invalidate, redirect.

Invariants:
    - Validation runs first; storage is never touched for an invalid form
    - A form naming an unknown customer is rejected as a customerId field error
    - Each operation issues at most one write statement
    - Cache invalidation happens only after a successful write
    - A storage failure anywhere in an operation, including the customer lookup,
      comes back as the "Database Error" state
    - Every expected failure comes back as an ActionState; only unexpected
      exceptions propagate
    - No retries: each failure is reported once

Design Decisions:
    - Repository and cache injected (Protocols): tests use fakes, routes use SQL
    - today() injected: keeps create deterministic under test
    - Update/delete of an unknown id returns a not-found ActionState instead of
      pretending to succeed
"""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone

from invoicer.core.action_state import (
    ActionState, DELETED_MESSAGE, invoice_not_found, storage_failed, validation_failed,
)
from invoicer.core.domain_types import InvoiceAction, InvoiceId, to_cents
from invoicer.core.errors import DatabaseError
from invoicer.core.repository_protocols import InvoiceRepository, ViewCache
from invoicer.core.validate_invoice import (
    CUSTOMER_MESSAGE, InvoiceValidation, missing_fields_message, validate_invoice_form,
)

logger = logging.getLogger(__name__)

INVOICES_PATH = "/dashboard/invoices"


def utc_today() -> str:
    """Current UTC date as YYYY-MM-DD."""
    return datetime.now(timezone.utc).date().isoformat()


class InvoiceActions:
    """Create/update/delete invoices from raw form mappings."""

    def __init__(
        self,
        repo: InvoiceRepository,
        cache: ViewCache,
        invoices_path: str = INVOICES_PATH,
        today: Callable[[], str] = utc_today,
    ):
        self.repo = repo
        self.cache = cache
        self.invoices_path = invoices_path
        self.today = today

    async def _validate(
        self, raw: Mapping[str, object], action: InvoiceAction,
    ) -> InvoiceValidation:
        validation = validate_invoice_form(raw, action)
        if not validation.success:
            return validation
        if not await self.repo.customer_exists(validation.data.customer_id):
            return InvoiceValidation(
                success=False,
                errors={"customerId": [CUSTOMER_MESSAGE]},
                message=missing_fields_message(action),
            )
        return validation

    def _finish(self) -> ActionState:
        self.cache.invalidate(self.invoices_path)
        return ActionState(redirect_to=self.invoices_path)

    async def create(self, raw: Mapping[str, object]) -> ActionState:
        try:
            validation = await self._validate(raw, InvoiceAction.CREATE)
            if not validation.success:
                return validation_failed(validation.errors, validation.message)
            data = validation.data
            invoice_id = await self.repo.insert(
                data.customer_id, to_cents(data.amount), data.status,
                data.date or self.today(),
            )
        except DatabaseError as e:
            logger.error(
                f"Failed to create invoice: {e.message}",
                extra={"customer_id": raw.get("customerId"), "error_code": e.code},
            )
            return storage_failed(InvoiceAction.CREATE)

        logger.info(
            "Invoice created",
            extra={"invoice_id": invoice_id, "customer_id": data.customer_id},
        )
        return self._finish()

    async def update(
        self, invoice_id: InvoiceId, raw: Mapping[str, object],
    ) -> ActionState:
        try:
            validation = await self._validate(raw, InvoiceAction.UPDATE)
            if not validation.success:
                return validation_failed(validation.errors, validation.message)
            data = validation.data
            matched = await self.repo.update(
                invoice_id, data.customer_id, to_cents(data.amount),
                data.status, data.date,
            )
        except DatabaseError as e:
            logger.error(
                f"Failed to update invoice: {e.message}",
                extra={"invoice_id": invoice_id, "error_code": e.code},
            )
            return storage_failed(InvoiceAction.UPDATE)

        if not matched:
            logger.warning("Update matched no invoice", extra={"invoice_id": invoice_id})
            return invoice_not_found(InvoiceAction.UPDATE)

        logger.info("Invoice updated", extra={"invoice_id": invoice_id})
        return self._finish()

    async def delete(self, invoice_id: InvoiceId) -> ActionState:
        try:
            matched = await self.repo.delete(invoice_id)
        except DatabaseError as e:
            logger.error(
                f"Failed to delete invoice: {e.message}",
                extra={"invoice_id": invoice_id, "error_code": e.code},
            )
            return storage_failed("Delete")

        if not matched:
            logger.warning("Delete matched no invoice", extra={"invoice_id": invoice_id})
            return invoice_not_found("Delete")

        self.cache.invalidate(self.invoices_path)
        logger.info("Invoice deleted", extra={"invoice_id": invoice_id})
        return ActionState(message=DELETED_MESSAGE)
