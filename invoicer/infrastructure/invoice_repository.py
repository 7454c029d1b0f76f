"""Invoice Repository — parameterized SQL for the invoices and customers tables.

Invariants:
    - Each write is exactly one statement followed by a commit (no multi-statement transactions)
    - Every SQLAlchemy failure is rolled back and re-raised as DatabaseError
    - update/delete report whether a row matched; they never raise for a missing id
    - Read queries never commit

Design Decisions:
    - SQLAlchemy Core insert/update/delete over ORM unit-of-work: one bound statement
      per mutation, no identity-map surprises
    - Date strings converted here: a malformed date is a storage rejection, not a
      form validation error
"""

import datetime
import logging
import math
import uuid

from sqlalchemy import String, case, cast, delete, func, insert, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from invoicer.core.domain_types import (
    Cents, CustomerId, InvoiceId, InvoiceStatus,
)
from invoicer.core.errors import DatabaseError, ErrorContext
from invoicer.models.customer import Customer
from invoicer.models.invoice import Invoice

logger = logging.getLogger(__name__)


def _parse_date(value: str, operation: str) -> datetime.date:
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise DatabaseError(f"invalid date value {value!r}", operation)


class SqlInvoiceRepository:
    """InvoiceRepository backed by an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Writes ──────────────────────────────────────────────────

    async def insert(
        self, customer_id: CustomerId, amount_cents: Cents,
        status: InvoiceStatus, date: str,
    ) -> InvoiceId:
        invoice_id = InvoiceId(uuid.uuid4())
        stmt = insert(Invoice).values(
            id=invoice_id,
            customer_id=customer_id,
            amount=amount_cents,
            status=InvoiceStatus(status).value,
            date=_parse_date(date, "insert"),
        )
        await self._write(stmt, "insert", customer_id=customer_id)
        return invoice_id

    async def update(
        self, invoice_id: InvoiceId, customer_id: CustomerId,
        amount_cents: Cents, status: InvoiceStatus, date: str | None,
    ) -> bool:
        values = {
            "customer_id": customer_id,
            "amount": amount_cents,
            "status": InvoiceStatus(status).value,
        }
        if date is not None:
            values["date"] = _parse_date(date, "update")
        stmt = (
            update(Invoice)
            .where(Invoice.id == invoice_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self._write(stmt, "update", invoice_id=invoice_id)
        return result.rowcount > 0

    async def delete(self, invoice_id: InvoiceId) -> bool:
        stmt = (
            delete(Invoice)
            .where(Invoice.id == invoice_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._write(stmt, "delete", invoice_id=invoice_id)
        return result.rowcount > 0

    async def _write(self, stmt, operation: str, **ids):
        try:
            result = await self.db.execute(stmt)
            await self.db.commit()
            return result
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Invoice {operation} failed: {e}", extra=ids)
            invoice_id = ids.get("invoice_id")
            raise DatabaseError(
                "statement rejected", operation,
                ErrorContext(
                    invoice_id=str(invoice_id) if invoice_id else None,
                    customer_id=ids.get("customer_id"),
                ),
            )

    # ─── Reads ───────────────────────────────────────────────────

    async def customer_exists(self, customer_id: CustomerId) -> bool:
        try:
            result = await self.db.execute(
                select(Customer.id).where(Customer.id == customer_id),
            )
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Customer lookup failed: {e}", extra={"customer_id": customer_id})
            raise DatabaseError(
                "customer lookup failed", "query", ErrorContext(customer_id=customer_id),
            )
        return result.scalar_one_or_none() is not None

    async def get_by_id(self, invoice_id: InvoiceId) -> Invoice | None:
        result = await self.db.execute(
            select(Invoice).where(Invoice.id == invoice_id),
        )
        return result.unique().scalar_one_or_none()

    def _matches(self, query: str):
        pattern = f"%{query}%"
        return or_(
            Customer.name.ilike(pattern),
            Customer.email.ilike(pattern),
            cast(Invoice.amount, String).ilike(pattern),
            cast(Invoice.date, String).ilike(pattern),
            Invoice.status.ilike(pattern),
        )

    async def list_filtered(
        self, query: str, page: int, page_size: int,
    ) -> list[tuple[Invoice, Customer]]:
        offset = (max(page, 1) - 1) * page_size
        stmt = (
            select(Invoice, Customer)
            .join(Customer, Invoice.customer_id == Customer.id)
            .where(self._matches(query))
            .order_by(Invoice.date.desc())
            .limit(page_size)
            .offset(offset)
        )
        result = await self.db.execute(stmt)
        return [(row.Invoice, row.Customer) for row in result.unique()]

    async def count_pages(self, query: str, page_size: int) -> int:
        stmt = (
            select(func.count(Invoice.id))
            .join(Customer, Invoice.customer_id == Customer.id)
            .where(self._matches(query))
        )
        total = (await self.db.execute(stmt)).scalar_one()
        return math.ceil(total / page_size)

    async def card_totals(self) -> dict:
        """Counts and paid/pending sums for the dashboard overview."""
        paid = func.coalesce(func.sum(case(
            (Invoice.status == InvoiceStatus.PAID.value, Invoice.amount), else_=0,
        )), 0)
        pending = func.coalesce(func.sum(case(
            (Invoice.status == InvoiceStatus.PENDING.value, Invoice.amount), else_=0,
        )), 0)
        invoice_row = (await self.db.execute(
            select(func.count(Invoice.id), paid, pending),
        )).one()
        customers = (await self.db.execute(
            select(func.count(Customer.id)),
        )).scalar_one()
        return {
            "number_of_invoices": invoice_row[0],
            "total_paid_cents": int(invoice_row[1]),
            "total_pending_cents": int(invoice_row[2]),
            "number_of_customers": customers,
        }

    async def list_customers(self) -> list[Customer]:
        result = await self.db.execute(
            select(Customer).order_by(Customer.name.asc()),
        )
        return list(result.scalars().all())
