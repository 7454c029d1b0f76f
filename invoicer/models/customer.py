"""Customer ORM — the people invoices are billed to.

Invariants:
    - id is a string key (seeded ids are UUID strings, but any non-empty key works)
    - email is unique
    - Read-only from the dashboard: no route mutates customers

Design Decisions:
    - String primary key over UUID: the invoice form posts customerId as plain text
      and the existence check compares it verbatim
"""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from invoicer.db.base import Base


class Customer(Base):
    """Customer — referenced by Invoice.customer_id."""
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    image_url: Mapped[str | None] = mapped_column(String(255), nullable=True)

    invoices: Mapped[list["Invoice"]] = relationship(
        "Invoice", back_populates="customer", lazy="raise",
    )
