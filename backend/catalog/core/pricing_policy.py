"""Pricing Policy — server-side price computation and pricing rule checks.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - price = cost_price + cost_price * profit_margin / 100, rounded half-up to
      cents, never taken from caller input
    - Rules run in a fixed order: compute price, then ordering, then margin
    - find_pricing_violation returns the first violated rule, None on success

Design Decisions:
    - compute_price returns a new ProductData: the caller candidate is never mutated
    - Price rounded before the ordering check: the rules see the stored value
    - Margin floor re-checked here even though field validation runs first;
      callers observe ordering errors before margin errors
"""

from dataclasses import replace
from decimal import ROUND_HALF_UP

from catalog.core.domain_types import MIN_PROFIT_MARGIN, MONEY_QUANTUM, ProductData
from catalog.core.errors import CatalogError, MarginError, PricingOrderError


def compute_price(product: ProductData) -> ProductData:
    """Derive price from cost price and profit margin."""
    price = product.cost_price + (product.cost_price * product.profit_margin / 100)
    return replace(product, price=price.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP))


def validate_price_ordering(product: ProductData) -> bool:
    """Sale and promotional prices must both exceed the price."""
    return product.sale_price > product.price and product.promotional_price > product.price


def validate_profit_margin(product: ProductData) -> bool:
    return product.profit_margin >= MIN_PROFIT_MARGIN


def find_pricing_violation(product: ProductData) -> CatalogError | None:
    """Chain the pricing rules on an already-priced product. First error wins."""
    if not validate_price_ordering(product):
        return PricingOrderError()
    if not validate_profit_margin(product):
        return MarginError()
    return None
