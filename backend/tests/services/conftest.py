"""Route/service test fixtures: async DB, FastAPI test client, fake outbound clients.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db overridden to use the test engine; joke/invoice clients replaced by fakes
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - StaticPool: every session shares the single in-memory connection
    - Assertions read through a fresh session (fresh_db) so no identity-map caching hides writes
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

import bookpost.infrastructure.database as db_module
import bookpost.models  # noqa: F401
from bookpost.api.dependencies import get_invoice_client, get_joke_client
from bookpost.db.base import Base
from bookpost.infrastructure.database import DatabaseSessionManager, get_db
from bookpost.main import app
from bookpost.models.author import Author
from bookpost.models.book import Book
from bookpost.models.category import Category
from tests.services.fakes import FakeInvoiceClient, FakeJokeClient, signup


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
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
def fresh_db(test_session_factory):
    """Factory for a new session, used to read state after a request."""
    return test_session_factory


@pytest.fixture
def fake_joke():
    return FakeJokeClient()


@pytest.fixture
def fake_invoice():
    return FakeInvoiceClient()


@pytest.fixture
async def client(test_engine, test_session_factory, fake_joke, fake_invoice):
    """FastAPI test client with DB and outbound clients overridden."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory

    async def override_get_db():
        async with manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_joke_client] = lambda: fake_joke
    app.dependency_overrides[get_invoice_client] = lambda: fake_invoice

    original_manager = db_module.db_manager
    db_module.db_manager = manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def alice(client):
    return await signup(client, "alice@example.com", "alice")


@pytest.fixture
async def bob(client):
    return await signup(client, "bob@example.com", "bob")


@pytest.fixture
async def seed_books(test_db):
    """Two authors, two categories, three books (prices 15000, 20000, 12500)."""
    tolkien = Author(first_name="J.R.R.", last_name="Tolkien")
    orwell = Author(first_name="George", last_name="Orwell")
    fantasy = Category(name="Fantasy")
    dystopia = Category(name="Dystopia")
    test_db.add_all([tolkien, orwell, fantasy, dystopia])
    await test_db.flush()
    books = [
        Book(title="The Hobbit", price=15_000, author_id=tolkien.id, category_id=fantasy.id),
        Book(title="1984", price=20_000, author_id=orwell.id, category_id=dystopia.id),
        Book(title="Animal Farm", price=12_500, author_id=orwell.id, category_id=dystopia.id),
    ]
    test_db.add_all(books)
    await test_db.commit()
    return books
