"""Catalog Service — CRUD orchestration around the pricing policy.

Invariants:
    - Field validation and pricing rules run before any store write (no partial writes)
    - Create and update share one pricing sequence: compute price, ordering, margin
    - Caller-supplied price is always discarded and recomputed
    - Every non-success outcome is a CatalogError subclass; nothing is retried

Design Decisions:
    - Impureim sandwich: store reads, pure core checks, store writes
    - Update hands the version read at lookup to replace(), so a write landing
      between lookup and replace is a conflict, not a silent overwrite
    - Create checks the Transient -> Persisted transition: the store must
      hand back an identity
    - ConcurrencyError from replace() re-checks existence: a vanished row is
      reported as not found, a still-present row propagates the conflict unchanged
"""

import logging
from dataclasses import replace

from catalog.core.domain_types import ProductData, ProductId, ProductState
from catalog.core.errors import (
    ConcurrencyError,
    DatabaseError,
    ErrorContext,
    FieldValidationError,
    IdMismatchError,
    ResourceNotFoundError,
)
from catalog.core.pricing_policy import compute_price, find_pricing_violation
from catalog.core.repository_protocols import ProductStore
from catalog.core.validate_fields import validate_product_fields

logger = logging.getLogger(__name__)


def _not_found(product_id: ProductId, operation: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Product", str(product_id),
        ErrorContext(product_id=product_id, operation=operation),
    )


class CatalogService:
    """Product CRUD with server-side pricing."""

    def __init__(self, store: ProductStore):
        self.store = store

    async def list_products(self) -> list[ProductData]:
        return await self.store.find_all()

    async def get_product(self, product_id: ProductId) -> ProductData:
        product = await self.store.find_by_id(product_id)
        if product is None:
            raise _not_found(product_id, "get")
        return product

    async def create_product(self, candidate: ProductData) -> ProductData:
        """Validate, price, and insert a new product. Returns it with its id."""
        _check_fields(candidate, "create")
        priced = _apply_pricing(candidate.with_id(None), "create")
        created = await self.store.insert(priced)
        if created.state is not ProductState.PERSISTED:
            raise DatabaseError(
                "store returned a product without identity", "insert",
                ErrorContext(operation="create"),
            )
        logger.info(
            f"Product created: {created.name}",
            extra={"product_id": created.id, "operation": "create"},
        )
        return created

    async def update_product(
        self, product_id: ProductId, candidate: ProductData,
    ) -> None:
        """Full replace of an existing product's fields."""
        _check_fields(candidate, "update")
        if candidate.id != product_id:
            raise IdMismatchError(
                product_id, candidate.id,
                ErrorContext(product_id=product_id, operation="update"),
            )
        existing = await self.store.find_by_id(product_id)
        if existing is None:
            raise _not_found(product_id, "update")

        priced = replace(
            _apply_pricing(candidate, "update"), version=existing.version,
        )
        try:
            await self.store.replace(product_id, priced)
        except ConcurrencyError:
            if not await self.store.exists(product_id):
                raise _not_found(product_id, "update")
            raise
        logger.info(
            f"Product updated: {priced.name}",
            extra={"product_id": product_id, "operation": "update"},
        )

    async def delete_product(self, product_id: ProductId) -> None:
        if await self.store.find_by_id(product_id) is None:
            raise _not_found(product_id, "delete")
        await self.store.remove(product_id)
        logger.info(
            "Product deleted",
            extra={"product_id": product_id, "operation": "delete"},
        )


# ─── Validation Steps ────────────────────────────────────────────

def _check_fields(candidate: ProductData, operation: str) -> None:
    violations = validate_product_fields(candidate)
    if violations:
        logger.warning(
            f"Product rejected on {operation}: "
            f"{', '.join(v.field for v in violations)}",
            extra={"product_id": candidate.id, "operation": operation},
        )
        raise FieldValidationError(
            violations,
            ErrorContext(product_id=candidate.id, operation=operation),
        )


def _apply_pricing(candidate: ProductData, operation: str) -> ProductData:
    priced = compute_price(candidate)
    error = find_pricing_violation(priced)
    if error is not None:
        error.context.product_id = candidate.id
        error.context.operation = operation
        logger.warning(
            f"Product rejected on {operation}: {error.message}",
            extra={"error_code": error.code, "operation": operation},
        )
        raise error
    return priced
