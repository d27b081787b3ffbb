"""Service test fixtures — async DB, controllable stores, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database and a fresh QueryCache
    - get_db, get_query_cache and get_product_provider overridden on the app
    - Store latency is zero unless a test gates it explicitly

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - db_manager patched so the readiness probe sees the test engine
"""

import asyncio
import random

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from storefront.api.dependencies import get_product_provider, get_query_cache
from storefront.core.errors import ProviderUnavailableError
from storefront.db.base import Base
from storefront.infrastructure.database import get_db, DatabaseSessionManager
from storefront.infrastructure.query_cache import QueryCache
from storefront.infrastructure.simulated_store import SimulatedProductStore
from storefront.services.product_provider import ProductProvider
import storefront.infrastructure.database as db_module
import storefront.models  # noqa: F401
from storefront.main import app


class RecordingStore:
    """SimulatedProductStore wrapper that records calls and can be gated or failed."""

    def __init__(self, seed: int = 7):
        self.inner = SimulatedProductStore(latency_seconds=0, rng=random.Random(seed))
        self.calls: list[tuple[str, int]] = []
        self.fail_with: BaseException | None = None
        self.gate: asyncio.Event | None = None
        self.started = asyncio.Event()

    async def list_products(self, q, page, page_size):
        self.calls.append((q, page))
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        return await self.inner.list_products(q, page, page_size)


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def cache():
    return QueryCache()


@pytest.fixture
def provider(store, cache):
    return ProductProvider(store, cache)


@pytest.fixture
def unavailable():
    return ProviderUnavailableError("catalog backend unreachable")


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
async def client(test_engine, test_session_factory, provider, cache):
    """FastAPI test client with DB, cache and provider overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_query_cache] = lambda: cache
    app.dependency_overrides[get_product_provider] = lambda: provider

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
