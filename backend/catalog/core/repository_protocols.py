"""Boundary Protocols — contract between the catalog core and its persistence shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Store methods exchange ProductData, never ORM instances
    - replace() writes only if the stored version still equals product.version
      (the version returned by find_by_id); otherwise it raises ConcurrencyError

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO; the pure pricing and validation
      functions that run around these calls are never async themselves
"""

from typing import Protocol

from catalog.core.domain_types import ProductData, ProductId


class ProductStore(Protocol):
    """Id-keyed product persistence — implemented by shell."""
    async def find_all(self) -> list[ProductData]: ...
    async def find_by_id(self, product_id: ProductId) -> ProductData | None: ...
    async def insert(self, product: ProductData) -> ProductData: ...
    async def replace(self, product_id: ProductId, product: ProductData) -> None: ...
    async def remove(self, product_id: ProductId) -> None: ...
    async def exists(self, product_id: ProductId) -> bool: ...
