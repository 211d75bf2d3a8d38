"""Product ORM — persists catalog products.

Invariants:
    - id is an autoincrement integer primary key assigned on insert
    - Monetary columns are Numeric(18, 2); text columns are unbounded
    - version is bumped by SQLAlchemy on every UPDATE; a flush that matches
      no row at the expected version raises StaleDataError

Design Decisions:
    - version_id_col for optimistic concurrency: no row locks, conflicts
      detected at flush time and mapped by the store
    - to_domain carries version out so the store can compare it on replace
    - to_domain / apply_domain keep ProductData <-> ORM conversion in one place
"""

from decimal import Decimal

from sqlalchemy import Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column

from catalog.core.domain_types import ProductData, ProductId
from catalog.db.base import Base

_REPLACEABLE_FIELDS = (
    "name", "description", "cost_price", "profit_margin", "price",
    "sale_price", "promotional_price", "category", "stock",
)


class Product(Base):
    """Catalog product row."""
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    cost_price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    profit_margin: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    sale_price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    promotional_price: Mapped[Decimal] = mapped_column(
        Numeric(18, 2), nullable=False,
    )
    category: Mapped[str] = mapped_column(
        Text, nullable=False, index=True,
    )
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    @classmethod
    def from_domain(cls, product: ProductData) -> "Product":
        row = cls()
        row.apply_domain(product)
        return row

    def apply_domain(self, product: ProductData) -> None:
        """Full replace of every field except identity."""
        for name in _REPLACEABLE_FIELDS:
            setattr(self, name, getattr(product, name))

    def to_domain(self) -> ProductData:
        return ProductData(
            id=ProductId(self.id),
            version=self.version,
            **{name: getattr(self, name) for name in _REPLACEABLE_FIELDS},
        )
