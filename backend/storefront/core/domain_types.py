"""Domain Types — value objects shared by the read pipeline and the write path.

Invariants:
    - ProductRecord ids are unique within one result set, not across pages
    - RenderPayload is immutable and owned by the render call that produced it
    - Cache scope tags are str Enums — never raw strings at call sites

Design Decisions:
    - Frozen dataclasses over Pydantic in core: no validation cost on the hot path,
      Pydantic stays at the API boundary (ADR: DDD boundary)
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType

from storefront.core.product_params import QueryParameterSet


ProductId = NewType("ProductId", int)


class CacheScope(str, Enum):
    """Cache invalidation tags — one per cached listing."""
    PRODUCTS = "products"


@dataclass(frozen=True)
class ProductRecord:
    """One item of a products listing page."""
    id: ProductId
    name: str
    price: int
    description: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "description": self.description,
        }


@dataclass(frozen=True)
class RenderPayload:
    """Resolved, render-ready listing: records plus the params that produced them."""
    records: tuple[ProductRecord, ...]
    params: QueryParameterSet

    @property
    def is_empty(self) -> bool:
        return not self.records
