"""Seed — creates tables and loads a demo user, customers and invoices.

Usage:
    python -m invoicer.db.seed

Invariants:
    - Idempotent: rows that already exist (same id or email) are left alone
    - Demo invoice amounts are stored in cents like every other write
"""

import asyncio
import datetime
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from invoicer.config import get_settings
from invoicer.db.base import Base
from invoicer.db.session import create_session_factory
from invoicer.infrastructure.observability import setup_logging
from invoicer.infrastructure.passwords import generate_password_hash
from invoicer.models.customer import Customer
from invoicer.models.invoice import Invoice
from invoicer.models.user import User

logger = logging.getLogger(__name__)

DEMO_USER = {
    "id": uuid.UUID("410544b2-4001-4271-9855-fec4b6a6442a"),
    "name": "User",
    "email": "user@nextmail.com",
    "password": "123456",
}

DEMO_CUSTOMERS = [
    {"id": "3958dc9e-712f-4377-85e9-fec4b6a6442a", "name": "Delba de Oliveira",
     "email": "delba@oliveira.com", "image_url": "/customers/delba-de-oliveira.png"},
    {"id": "3958dc9e-742f-4377-85e9-fec4b6a6442a", "name": "Lee Robinson",
     "email": "lee@robinson.com", "image_url": "/customers/lee-robinson.png"},
    {"id": "3958dc9e-737f-4377-85e9-fec4b6a6442a", "name": "Hector Simpson",
     "email": "hector@simpson.com", "image_url": "/customers/hector-simpson.png"},
]

DEMO_INVOICES = [
    (0, 15795, "pending", "2022-12-06"),
    (1, 20348, "pending", "2022-11-14"),
    (2, 3040, "paid", "2022-10-29"),
    (0, 44800, "paid", "2023-09-10"),
    (1, 34577, "pending", "2023-08-05"),
]


async def seed(db: AsyncSession) -> dict[str, int]:
    """Insert missing demo rows. Returns how many of each were added."""
    added = {"users": 0, "customers": 0, "invoices": 0}

    existing_user = (await db.execute(
        select(User.id).where(User.email == DEMO_USER["email"]),
    )).scalar_one_or_none()
    if existing_user is None:
        db.add(User(
            id=DEMO_USER["id"], name=DEMO_USER["name"], email=DEMO_USER["email"],
            password_hash=generate_password_hash(DEMO_USER["password"]),
        ))
        added["users"] += 1

    known = set((await db.execute(select(Customer.id))).scalars().all())
    for row in DEMO_CUSTOMERS:
        if row["id"] not in known:
            db.add(Customer(**row))
            added["customers"] += 1

    if added["customers"]:
        await db.flush()
        for idx, cents, status, day in DEMO_INVOICES:
            db.add(Invoice(
                customer_id=DEMO_CUSTOMERS[idx]["id"], amount=cents, status=status,
                date=datetime.date.fromisoformat(day),
            ))
            added["invoices"] += 1

    await db.commit()
    return added


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, "text")
    engine, factory = create_session_factory(settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with factory() as db:
        added = await seed(db)
    await engine.dispose()
    logger.info(f"Seed complete: {added}")


if __name__ == "__main__":
    asyncio.run(main())
