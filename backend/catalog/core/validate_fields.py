"""Field Validation — required/range/precision checks over a candidate product.

Invariants:
    - PURE: returns every violation found, in field order, never raises
    - Empty list means the candidate passes field-level validation
    - profit_margin is bounded above here; its 55% floor belongs to the pricing policy
    - Amounts and margin must fit the stored scale (two decimal places) so
      pricing rules run on exactly the values that get persisted

Design Decisions:
    - Explicit function over Pydantic Field constraints: the same rules apply
      whether the candidate came from HTTP or from another caller
    - Excess precision rejected rather than rounded: a silently rounded
      sale price could fall to the computed price after the ordering check
"""

from decimal import Decimal

from catalog.core.domain_types import (
    MAX_AMOUNT, MAX_PROFIT_MARGIN, MONEY_QUANTUM, FieldViolation, ProductData,
)

# (attribute, label, must be positive)
_DECIMAL_FIELDS = (
    ("cost_price", "CostPrice", True),
    ("profit_margin", "ProfitMargin", False),
    ("sale_price", "SalePrice", True),
    ("promotional_price", "PromotionalPrice", True),
)


def _is_blank(value: str) -> bool:
    return not (value or "").strip()


def _has_excess_precision(value: Decimal) -> bool:
    return value != value.quantize(MONEY_QUANTUM)


def _check_decimal(product: ProductData, attr: str, label: str, positive: bool):
    value = getattr(product, attr)
    if positive and value <= 0:
        return FieldViolation(attr, f"{label} must be greater than 0.")
    if attr == "profit_margin" and value > MAX_PROFIT_MARGIN:
        return FieldViolation(attr, "ProfitMargin must not exceed 100%.")
    if value >= MAX_AMOUNT:
        return FieldViolation(attr, f"{label} must be less than {MAX_AMOUNT}.")
    if _has_excess_precision(value):
        return FieldViolation(attr, f"{label} must have at most 2 decimal places.")
    return None


def validate_product_fields(product: ProductData) -> list[FieldViolation]:
    """Collect all field-level violations for a candidate product."""
    violations = []
    if _is_blank(product.name):
        violations.append(FieldViolation("name", "Name is required."))
    if _is_blank(product.description):
        violations.append(FieldViolation("description", "Description is required."))
    for attr, label, positive in _DECIMAL_FIELDS:
        violation = _check_decimal(product, attr, label, positive)
        if violation:
            violations.append(violation)
    if _is_blank(product.category):
        violations.append(FieldViolation("category", "Category is required."))
    if product.stock < 0:
        violations.append(FieldViolation("stock", "Stock must be a positive value."))
    return violations
