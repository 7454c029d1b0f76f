"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Customer owns invoices; User is independent of invoice data

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from invoicer.models.customer import Customer  # noqa: F401
from invoicer.models.invoice import Invoice  # noqa: F401
from invoicer.models.user import User  # noqa: F401
