"""Product fakes — in-memory ProductStore and candidate builders for service tests.

Shared by conftest.py fixtures and test modules.
"""

from dataclasses import replace
from decimal import Decimal

from catalog.core.domain_types import ProductData, ProductId
from catalog.core.errors import ConcurrencyError


class FakeProductStore:
    """In-memory ProductStore.

    Versions start at 1 and bump on every replace; replace() with a version
    other than the stored one raises ConcurrencyError like the real store.

    conflict_on_replace: when set, replace() raises ConcurrencyError; if
    remove_on_conflict is also set the row is dropped first, simulating a
    concurrent delete.
    """

    def __init__(self):
        self.rows: dict[int, ProductData] = {}
        self.next_id = 1
        self.conflict_on_replace = False
        self.remove_on_conflict = False
        self.writes = 0

    async def find_all(self) -> list[ProductData]:
        return list(self.rows.values())

    async def find_by_id(self, product_id: ProductId) -> ProductData | None:
        return self.rows.get(product_id)

    async def insert(self, product: ProductData) -> ProductData:
        stored = replace(product.with_id(ProductId(self.next_id)), version=1)
        self.rows[stored.id] = stored
        self.next_id += 1
        self.writes += 1
        return stored

    async def replace(self, product_id: ProductId, product: ProductData) -> None:
        if self.conflict_on_replace:
            if self.remove_on_conflict:
                self.rows.pop(product_id, None)
            raise ConcurrencyError(f"Product '{product_id}' was modified concurrently")
        stored = self.rows.get(product_id)
        if stored is None or stored.version != product.version:
            raise ConcurrencyError(f"Product '{product_id}' was modified concurrently")
        self.rows[product_id] = replace(
            product, id=product_id, version=stored.version + 1,
        )
        self.writes += 1

    async def remove(self, product_id: ProductId) -> None:
        self.rows.pop(product_id, None)
        self.writes += 1

    async def exists(self, product_id: ProductId) -> bool:
        return product_id in self.rows


def make_candidate(**overrides) -> ProductData:
    """Valid candidate: cost 100 at 60% margin (price 160)."""
    fields = dict(
        name="Product A",
        description="Test Product",
        cost_price=Decimal("100"),
        profit_margin=Decimal("60"),
        sale_price=Decimal("180"),
        promotional_price=Decimal("165"),
        category="Category A",
        stock=10,
    )
    fields.update(overrides)
    return ProductData(**fields)


def make_payload(**overrides) -> dict:
    """Valid JSON body for POST/PUT."""
    payload = {
        "name": "Product A",
        "description": "Test Product",
        "cost_price": "100",
        "profit_margin": "60",
        "sale_price": "180",
        "promotional_price": "165",
        "category": "Category A",
        "stock": 10,
    }
    payload.update(overrides)
    return payload

