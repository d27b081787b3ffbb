"""Create Product — write path that invalidates cached listing pages on success.

Invariants:
    - apply() never raises past its boundary: failures come back
      as MutationResult(success=False)
    - Cache invalidated only after the write committed; a failed write leaves
      every cache entry untouched
    - No client-visible refresh is triggered here; the next resolve recomputes
"""

import logging
from dataclasses import dataclass

from storefront.core.domain_types import CacheScope, ProductId
from storefront.core.errors import StorefrontError
from storefront.core.repository_protocols import ProductWriter
from storefront.infrastructure.query_cache import QueryCache
from storefront.schemas.product import ProductCreate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationResult:
    success: bool
    product_id: ProductId | None = None
    error_code: str | None = None


class CreateProductHandler:
    """Creates a product, then marks all cached products listings stale."""

    def __init__(self, writer: ProductWriter, cache: QueryCache | None = None):
        self.writer = writer
        self.cache = cache

    async def apply(self, fields: ProductCreate) -> MutationResult:
        logger.info(f"Creating product: {fields.name}")
        try:
            product_id = await self.writer.create(
                fields.name, fields.price, fields.description,
            )
        except StorefrontError as e:
            logger.warning(
                f"Product creation failed: {e.message}",
                extra={"error_code": e.code},
            )
            return MutationResult(success=False, error_code=e.code)
        except Exception as e:
            logger.error(f"Unexpected product write error: {e}", exc_info=True)
            return MutationResult(success=False, error_code="MUTATION_FAILED")

        if self.cache is not None:
            await self.cache.invalidate_tag(CacheScope.PRODUCTS.value)
        logger.info("Product created", extra={"product_id": product_id})
        return MutationResult(success=True, product_id=product_id)
