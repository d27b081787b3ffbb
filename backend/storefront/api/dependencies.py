"""API Dependencies — process-wide read-path singletons and per-request write path.

Invariants:
    - One QueryCache per process, shared by the provider and the create handler
      (invalidation must reach the cache the listing reads from)
    - Writer is per-request: bound to the request's DB session

Design Decisions:
    - Lazy module-level singletons over lifespan state: routes stay usable under
      httpx ASGITransport, which does not run lifespan (tests override via
      app.dependency_overrides)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import get_settings
from storefront.infrastructure.database import get_db
from storefront.infrastructure.product_writer import SqlProductWriter
from storefront.infrastructure.query_cache import QueryCache
from storefront.infrastructure.simulated_store import SimulatedProductStore
from storefront.services.create_product import CreateProductHandler
from storefront.services.product_provider import ProductProvider

_query_cache: QueryCache | None = None
_product_provider: ProductProvider | None = None


def get_query_cache() -> QueryCache | None:
    global _query_cache
    if not get_settings().catalog_cache_enabled:
        return None
    if _query_cache is None:
        _query_cache = QueryCache(get_settings().query_cache_max_entries)
    return _query_cache


def get_product_provider() -> ProductProvider:
    global _product_provider
    if _product_provider is None:
        settings = get_settings()
        store = SimulatedProductStore(
            latency_seconds=settings.catalog_latency_ms / 1000,
        )
        _product_provider = ProductProvider(store, get_query_cache())
    return _product_provider


def get_create_product_handler(
    db: AsyncSession = Depends(get_db),
    cache: QueryCache | None = Depends(get_query_cache),
) -> CreateProductHandler:
    return CreateProductHandler(SqlProductWriter(db), cache)
