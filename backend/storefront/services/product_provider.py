"""Product Provider — async listing fetch through the tag-scoped query cache.

Invariants:
    - fetch() failures surface as ProviderUnavailableError, never swallowed
    - No caching of its own: the optional QueryCache is the only cache
    - Cache key is ("products", q, page), tagged CacheScope.PRODUCTS
"""

import logging

from storefront.core.domain_types import CacheScope, ProductRecord
from storefront.core.errors import ErrorContext, ProviderUnavailableError
from storefront.core.product_params import PAGE_SIZE, QueryParameterSet
from storefront.core.repository_protocols import ProductStore
from storefront.infrastructure.query_cache import QueryCache

logger = logging.getLogger(__name__)


def listing_cache_key(params: QueryParameterSet) -> tuple:
    return (CacheScope.PRODUCTS.value, params.q, params.page)


class ProductProvider:
    """Produces one listing page for resolved params."""

    def __init__(self, store: ProductStore, cache: QueryCache | None = None):
        self.store = store
        self.cache = cache

    async def fetch(self, params: QueryParameterSet) -> list[ProductRecord]:
        if self.cache is None:
            return await self._load(params)
        records = await self.cache.get_or_compute(
            listing_cache_key(params),
            lambda: self._load(params),
            tags=(CacheScope.PRODUCTS.value,),
        )
        return list(records)

    async def _load(self, params: QueryParameterSet) -> tuple[ProductRecord, ...]:
        try:
            records = await self.store.list_products(
                params.q, params.page, PAGE_SIZE,
            )
        except ProviderUnavailableError:
            raise
        except Exception as e:
            logger.error(f"Product store failed: {e}", exc_info=True)
            raise ProviderUnavailableError(
                type(e).__name__,
                ErrorContext(resource="products", query=params.q, page=params.page),
            ) from e
        logger.info(
            "Loaded products page",
            extra={"query": params.q, "page": params.page,
                   "record_count": len(records)},
        )
        return tuple(records)
