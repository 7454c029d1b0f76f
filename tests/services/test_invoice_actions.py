"""Invoice Actions — validate → persist → invalidate → redirect.

Invariants:
    - Invalid forms never reach the repository
    - Unknown customers rejected as a customerId field error, no write
    - amount stored as exact cents (19.99 → 1999)
    - Storage failure returns the exact "Database Error" message and skips invalidation
    - Success invalidates /dashboard/invoices and redirects there (create/update)
    - Delete never redirects; unknown ids come back as not-found

Design Decisions:
    - FakeRepo/FakeCache record calls: asserts on "storage not invoked" are exact
    - One scenario runs against the real SQL repository on SQLite
    - Outage scenarios use a real SQL repository on a database with no tables,
      so the very first statement (the customer lookup) fails in the driver
"""

from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from invoicer.core.action_state import DELETED_MESSAGE
from invoicer.core.errors import DatabaseError
from invoicer.core.validate_invoice import AMOUNT_MESSAGE, CUSTOMER_MESSAGE, STATUS_MESSAGE
from invoicer.infrastructure.invoice_repository import SqlInvoiceRepository
from invoicer.infrastructure.view_cache import InMemoryViewCache
from invoicer.models.invoice import Invoice
from invoicer.services.invoice_actions import InvoiceActions

VALID_FORM = {"customerId": "c1", "amount": "19.99", "status": "paid", "date": "2024-01-01"}


class FakeRepo:
    def __init__(self, fail: bool = False, matched: bool = True, customers=("c1",)):
        self.fail = fail
        self.matched = matched
        self.customers = set(customers)
        self.calls: list[tuple] = []

    async def customer_exists(self, customer_id):
        return customer_id in self.customers

    async def insert(self, customer_id, amount_cents, status, date):
        self.calls.append(("insert", customer_id, amount_cents, status, date))
        if self.fail:
            raise DatabaseError("connection refused", "insert")
        return uuid4()

    async def update(self, invoice_id, customer_id, amount_cents, status, date):
        self.calls.append(("update", invoice_id, customer_id, amount_cents, status, date))
        if self.fail:
            raise DatabaseError("connection refused", "update")
        return self.matched

    async def delete(self, invoice_id):
        self.calls.append(("delete", invoice_id))
        if self.fail:
            raise DatabaseError("connection refused", "delete")
        return self.matched


class FakeCache:
    def __init__(self):
        self.invalidated: list[str] = []

    def invalidate(self, path):
        self.invalidated.append(path)


def _actions(repo: FakeRepo, cache: FakeCache | None = None) -> InvoiceActions:
    return InvoiceActions(repo, cache or FakeCache(), today=lambda: "2026-10-18")


# ─── create ──────────────────────────────────────────────────────

async def test_create_stores_exact_cents_and_redirects():
    repo, cache = FakeRepo(), FakeCache()
    state = await _actions(repo, cache).create(VALID_FORM)

    assert repo.calls == [("insert", "c1", 1999, "paid", "2024-01-01")]
    assert state.redirect_to == "/dashboard/invoices"
    assert state.succeeded
    assert cache.invalidated == ["/dashboard/invoices"]


async def test_create_defaults_date_to_today():
    repo = FakeRepo()
    form = {k: v for k, v in VALID_FORM.items() if k != "date"}
    await _actions(repo).create(form)
    assert repo.calls[0][4] == "2026-10-18"


@pytest.mark.parametrize("amount", ["0", "-1", "", "abc"])
async def test_create_with_bad_amount_never_touches_storage(amount):
    repo, cache = FakeRepo(), FakeCache()
    state = await _actions(repo, cache).create({**VALID_FORM, "amount": amount})

    assert state.errors == {"amount": [AMOUNT_MESSAGE]}
    assert state.message == "Missing Fields. Failed to Create Invoice."
    assert state.redirect_to is None
    assert repo.calls == []
    assert cache.invalidated == []


async def test_create_with_bad_status_fails_validation():
    repo = FakeRepo()
    state = await _actions(repo).create({**VALID_FORM, "status": "overdue"})
    assert state.errors == {"status": [STATUS_MESSAGE]}
    assert repo.calls == []


async def test_create_with_unknown_customer_is_field_error():
    repo = FakeRepo(customers=())
    state = await _actions(repo).create(VALID_FORM)
    assert state.errors == {"customerId": [CUSTOMER_MESSAGE]}
    assert repo.calls == []


async def test_create_storage_failure_returns_exact_message_without_invalidation():
    repo, cache = FakeRepo(fail=True), FakeCache()
    state = await _actions(repo, cache).create(VALID_FORM)

    assert state.message == "Database Error: Failed to Create Invoice."
    assert state.storage_failed
    assert state.redirect_to is None
    assert cache.invalidated == []
    assert len(repo.calls) == 1


# ─── update ──────────────────────────────────────────────────────

async def test_update_redirects_and_invalidates():
    repo, cache = FakeRepo(), FakeCache()
    invoice_id = uuid4()
    state = await _actions(repo, cache).update(invoice_id, VALID_FORM)

    assert repo.calls == [("update", invoice_id, "c1", 1999, "paid", "2024-01-01")]
    assert state.redirect_to == "/dashboard/invoices"
    assert cache.invalidated == ["/dashboard/invoices"]


async def test_update_validation_message_names_update():
    state = await _actions(FakeRepo()).update(uuid4(), {})
    assert state.message == "Missing Fields. Failed to Update Invoice."
    assert set(state.errors) == {"customerId", "amount", "status"}


async def test_update_storage_failure():
    cache = FakeCache()
    state = await _actions(FakeRepo(fail=True), cache).update(uuid4(), VALID_FORM)
    assert state.message == "Database Error: Failed to Update Invoice."
    assert cache.invalidated == []


async def test_update_unknown_id_is_not_found():
    cache = FakeCache()
    state = await _actions(FakeRepo(matched=False), cache).update(uuid4(), VALID_FORM)
    assert state.not_found
    assert state.redirect_to is None
    assert cache.invalidated == []


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_returns_message_without_redirect():
    repo, cache = FakeRepo(), FakeCache()
    state = await _actions(repo, cache).delete(uuid4())
    assert state.message == DELETED_MESSAGE
    assert state.redirect_to is None
    assert cache.invalidated == ["/dashboard/invoices"]


async def test_delete_storage_failure():
    state = await _actions(FakeRepo(fail=True)).delete(uuid4())
    assert state.message == "Database Error: Failed to Delete Invoice."


async def test_delete_unknown_id_is_not_found():
    state = await _actions(FakeRepo(matched=False)).delete(uuid4())
    assert state.not_found


# ─── against SQLite ──────────────────────────────────────────────

async def test_create_scenario_persists_1999_cents(test_db, seed_customer):
    actions = InvoiceActions(SqlInvoiceRepository(test_db), InMemoryViewCache())
    state = await actions.create(
        {"customerId": "c1", "amount": "19.99", "status": "paid", "date": "2024-01-01"},
    )
    assert state.redirect_to == "/dashboard/invoices"

    stored = (await test_db.execute(select(Invoice))).scalars().one()
    assert stored.amount == 1999
    assert stored.status == "paid"
    assert stored.date.isoformat() == "2024-01-01"
    assert Decimal(stored.amount) / 100 == Decimal("19.99")


# ─── database outage ─────────────────────────────────────────────

@pytest.fixture
async def unreachable_db():
    """Session on an empty database: every statement fails in the driver."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
    await engine.dispose()


async def test_create_during_outage_returns_database_error(unreachable_db):
    cache = FakeCache()
    actions = InvoiceActions(SqlInvoiceRepository(unreachable_db), cache)

    state = await actions.create(VALID_FORM)

    assert state.message == "Database Error: Failed to Create Invoice."
    assert state.storage_failed
    assert state.redirect_to is None
    assert cache.invalidated == []


async def test_update_during_outage_returns_database_error(unreachable_db):
    cache = FakeCache()
    actions = InvoiceActions(SqlInvoiceRepository(unreachable_db), cache)

    state = await actions.update(uuid4(), VALID_FORM)

    assert state.message == "Database Error: Failed to Update Invoice."
    assert state.storage_failed
    assert cache.invalidated == []


async def test_customer_lookup_failure_is_database_error(unreachable_db):
    with pytest.raises(DatabaseError):
        await SqlInvoiceRepository(unreachable_db).customer_exists("c1")
