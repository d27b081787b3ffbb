"""SQL Product Writer — ProductWriter implementation over an AsyncSession.

Invariants:
    - Commits before returning the new id; rolls back on any SQLAlchemy failure
    - Every SQLAlchemy failure is mapped to MutationFailedError (never leaks driver types)
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.domain_types import ProductId
from storefront.core.errors import ErrorContext, MutationFailedError
from storefront.models.product import Product

logger = logging.getLogger(__name__)


class SqlProductWriter:
    """Writes Product rows using the request-scoped DB session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, name: str, price: int, description: str,
    ) -> ProductId:
        product = Product(name=name, price=price, description=description)
        try:
            self.db.add(product)
            await self.db.commit()
            await self.db.refresh(product)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Product insert failed: {e}")
            raise MutationFailedError(
                "insert rejected by database",
                ErrorContext(resource="products"),
            ) from e
        return ProductId(product.id)
