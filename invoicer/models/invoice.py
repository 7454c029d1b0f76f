"""Invoice ORM — one billing record per row.

Invariants:
    - id is UUID primary key, generated on insert, never updated
    - amount is integer cents (never a float)
    - status is 'pending' or 'paid' (enforced by the validator before any write)
    - deletion is physical (no soft-delete flag)

Design Decisions:
    - Column named `amount` but holding cents: matches the table layout the dashboard
      queries already expect
    - Date column: malformed date strings are rejected by storage, not by the form validator
"""

import datetime
import uuid

from sqlalchemy import String, Integer, Date, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from invoicer.db.base import Base


class Invoice(Base):
    """Invoice entity — mutated only through InvoiceActions."""
    __tablename__ = "invoices"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    customer_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("customers.id"), nullable=False, index=True,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)

    customer: Mapped["Customer"] = relationship(
        "Customer", back_populates="invoices", lazy="joined",
    )
