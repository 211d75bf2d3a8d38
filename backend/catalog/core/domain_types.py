"""Domain Types — the product value and the primitives around it.

Invariants:
    - ProductData is immutable; every transformation returns a new value
    - id is None while the product is transient, set by the store once persisted
    - version is the store's concurrency token as of the last read; None while transient
    - Monetary fields are Decimal, never float

Design Decisions:
    - Frozen dataclass over the ORM model: core stays free of SQLAlchemy and
      the store converts at the boundary
    - NewType for ProductId: zero runtime cost, full type-checker support
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import NewType


ProductId = NewType("ProductId", int)


# ─── Pricing Constants ───────────────────────────────────────────

MIN_PROFIT_MARGIN = Decimal("55")
MAX_PROFIT_MARGIN = Decimal("100")

# Stored amounts and margins carry two decimal places
MONEY_QUANTUM = Decimal("0.01")
# Numeric(18, 2) holds 16 integer digits; price can reach twice the cost
MAX_AMOUNT = Decimal("1000000000000000")


class ProductState(str, Enum):
    """Lifecycle of a product relative to the store."""
    TRANSIENT = "transient"
    PERSISTED = "persisted"


@dataclass(frozen=True)
class ProductData:
    """A catalog product, either a caller candidate or a stored record."""
    name: str = ""
    description: str = ""
    cost_price: Decimal = Decimal("0")
    profit_margin: Decimal = Decimal("0")
    sale_price: Decimal = Decimal("0")
    promotional_price: Decimal = Decimal("0")
    category: str = ""
    stock: int = 0
    price: Decimal = Decimal("0")
    id: ProductId | None = None
    version: int | None = None

    @property
    def state(self) -> ProductState:
        if self.id is None:
            return ProductState.TRANSIENT
        return ProductState.PERSISTED

    def with_id(self, product_id: int | None) -> "ProductData":
        return replace(self, id=product_id, version=None)


@dataclass(frozen=True)
class FieldViolation:
    """One failed field-level rule."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}
