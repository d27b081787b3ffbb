"""Simulated Product Store — latency-bearing stand-in for the catalog backend.

Invariants:
    - Exactly page_size records per call, ids (page-1)*page_size+1 .. page*page_size
    - Name is "Product {id}", suffixed with " ({q})" when q is non-empty
    - Raises ProviderUnavailableError while marked unavailable (no partial page)

Design Decisions:
    - Random price per call: the store is intentionally non-deterministic so cache
      hits are observable (same price twice means the page was served from cache)
    - Injectable rng and latency for tests
"""

import asyncio
import logging
import random

from storefront.core.domain_types import ProductId, ProductRecord
from storefront.core.errors import ErrorContext, ProviderUnavailableError

logger = logging.getLogger(__name__)

PRODUCT_DESCRIPTION = "High quality product, built to last."
MIN_PRICE = 50
MAX_PRICE = 1049


class SimulatedProductStore:
    """ProductStore implementation that fabricates listing pages."""

    def __init__(
        self,
        latency_seconds: float = 0.8,
        rng: random.Random | None = None,
        available: bool = True,
    ):
        self.latency_seconds = latency_seconds
        self.available = available
        self._rng = rng or random.Random()

    async def list_products(
        self, q: str, page: int, page_size: int,
    ) -> list[ProductRecord]:
        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)
        if not self.available:
            raise ProviderUnavailableError(
                "catalog backend unreachable",
                ErrorContext(resource="products", query=q, page=page),
            )

        suffix = f" ({q})" if q else ""
        offset = (page - 1) * page_size
        return [
            ProductRecord(
                id=ProductId(offset + i + 1),
                name=f"Product {offset + i + 1}{suffix}",
                price=self._rng.randint(MIN_PRICE, MAX_PRICE),
                description=PRODUCT_DESCRIPTION,
            )
            for i in range(page_size)
        ]
