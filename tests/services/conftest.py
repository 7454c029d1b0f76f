"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - View cache emptied before and after every client test
    - Seeded user password hashed with few iterations (speed only)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - signed_in_client logs in through POST /login, so the session cookie is real
"""

import datetime

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from invoicer.db.base import Base
from invoicer.infrastructure.database import get_db, DatabaseSessionManager
from invoicer.infrastructure.passwords import generate_password_hash
from invoicer.infrastructure.view_cache import view_cache
from invoicer.models.customer import Customer
from invoicer.models.invoice import Invoice
from invoicer.models.user import User
import invoicer.infrastructure.database as db_module
from invoicer.main import app

USER_EMAIL = "user@nextmail.com"
USER_PASSWORD = "123456"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seed_customer(test_db):
    """Insert customer 'c1' into the test DB."""
    customer = Customer(id="c1", name="Delba de Oliveira", email="delba@oliveira.com")
    test_db.add(customer)
    await test_db.commit()
    return customer


@pytest.fixture
async def seed_invoice(test_db, seed_customer):
    """Insert one pending invoice for customer 'c1'."""
    invoice = Invoice(
        customer_id=seed_customer.id, amount=15795, status="pending",
        date=datetime.date(2022, 12, 6),
    )
    test_db.add(invoice)
    await test_db.commit()
    await test_db.refresh(invoice)
    return invoice


@pytest.fixture
async def seed_user(test_db):
    user = User(
        name="User", email=USER_EMAIL,
        password_hash=generate_password_hash(USER_PASSWORD, iterations=1000),
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager
    view_cache.clear()

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
    view_cache.clear()


@pytest.fixture
async def signed_in_client(client, seed_user):
    """Client holding a real session cookie for the seeded user."""
    res = await client.post(
        "/login", data={"email": USER_EMAIL, "password": USER_PASSWORD},
    )
    assert res.status_code == 303
    return client
