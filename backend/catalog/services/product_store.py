"""Product Store — SQLAlchemy implementation of the ProductStore protocol.

Invariants:
    - Every mutating method commits before returning
    - replace() is a full replace of all fields except identity and version
    - replace() only writes when the stored version equals the version the
      caller read; anything else is a ConcurrencyError
    - StaleDataError on flush becomes ConcurrencyError; the session is rolled back first

Design Decisions:
    - Expected version travels on ProductData, not in the session: the identity
      map holds rows weakly, so a row loaded by find_by_id may be gone by replace()
    - populate_existing on every read: a row still held in the identity map is
      refreshed instead of returning its stale version
    - find_all orders by id so listings are stable across backends
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from catalog.core.domain_types import ProductData, ProductId
from catalog.core.errors import ConcurrencyError, ErrorContext
from catalog.models.product import Product

logger = logging.getLogger(__name__)


class SqlAlchemyProductStore:
    """Products table accessed through an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(self) -> list[ProductData]:
        result = await self.db.execute(select(Product).order_by(Product.id))
        return [row.to_domain() for row in result.scalars().all()]

    async def find_by_id(self, product_id: ProductId) -> ProductData | None:
        row = await self.db.get(Product, product_id, populate_existing=True)
        return row.to_domain() if row else None

    async def insert(self, product: ProductData) -> ProductData:
        row = Product.from_domain(product)
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        return row.to_domain()

    async def replace(self, product_id: ProductId, product: ProductData) -> None:
        """Overwrite the stored row if it is still at product.version.

        Raises ConcurrencyError when the row is gone, its version moved past
        the one the caller read, or another writer commits between this load
        and the flush.
        """
        context = ErrorContext(product_id=product_id, operation="replace")
        row = await self.db.get(Product, product_id, populate_existing=True)
        if row is None:
            raise ConcurrencyError(
                f"Product '{product_id}' disappeared before update", context,
            )
        if row.version != product.version:
            logger.warning(
                f"Product version moved from {product.version} to {row.version}",
                extra={"product_id": product_id, "operation": "replace"},
            )
            raise ConcurrencyError(
                f"Product '{product_id}' was modified concurrently", context,
            )
        row.apply_domain(product)
        try:
            await self.db.commit()
        except StaleDataError as e:
            await self.db.rollback()
            logger.warning(
                f"Stale product row on replace: {e}",
                extra={"product_id": product_id, "operation": "replace"},
            )
            raise ConcurrencyError(
                f"Product '{product_id}' was modified concurrently", context,
            )

    async def remove(self, product_id: ProductId) -> None:
        row = await self.db.get(Product, product_id, populate_existing=True)
        if row is None:
            return
        await self.db.delete(row)
        await self.db.commit()

    async def exists(self, product_id: ProductId) -> bool:
        result = await self.db.execute(
            select(Product.id).where(Product.id == product_id),
        )
        return result.scalar_one_or_none() is not None
