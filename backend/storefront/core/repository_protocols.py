"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy (ADR: ExMA anti-pattern)
    - Async in Protocol: boundary methods are async because implementations do IO
"""

from typing import Protocol

from storefront.core.domain_types import ProductId, ProductRecord


class ProductStore(Protocol):
    """Contract for the listing read path — raises ProviderUnavailableError when unreachable."""
    async def list_products(
        self, q: str, page: int, page_size: int,
    ) -> list[ProductRecord]: ...


class ProductWriter(Protocol):
    """Contract for the product write path — implemented by shell."""
    async def create(
        self, name: str, price: int, description: str,
    ) -> ProductId: ...
