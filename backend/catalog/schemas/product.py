"""Product Schemas — Pydantic models for the /products API boundary.

Invariants:
    - Request schemas only coerce types; missing fields fall back to empty
      values so validate_product_fields reports them as violations
    - price in a request body is accepted and ignored (always recomputed)
    - ProductResponse never exposes the ORM version column

Design Decisions:
    - to_domain() on request schemas: routes hand ProductData to the service
      without knowing field names
    - Decimal kept as Decimal: JSON output is a string, no float rounding
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from catalog.core.domain_types import ProductData, ProductId


class ProductCreate(BaseModel):
    """Candidate product for POST."""
    name: str = ""
    description: str = ""
    cost_price: Decimal = Decimal("0")
    profit_margin: Decimal = Decimal("0")
    sale_price: Decimal = Decimal("0")
    promotional_price: Decimal = Decimal("0")
    category: str = ""
    stock: int = 0
    price: Decimal | None = None

    def to_domain(self) -> ProductData:
        return ProductData(**self.model_dump(exclude={"price"}))


class ProductUpdate(ProductCreate):
    """Replacement product for PUT — id must match the path."""
    id: int | None = None

    def to_domain(self) -> ProductData:
        data = self.model_dump(exclude={"price", "id"})
        product_id = ProductId(self.id) if self.id is not None else None
        return ProductData(id=product_id, **data)


class ProductResponse(BaseModel):
    """Public-facing product data."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    cost_price: Decimal
    profit_margin: Decimal
    price: Decimal
    sale_price: Decimal
    promotional_price: Decimal
    category: str
    stock: int
