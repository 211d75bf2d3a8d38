"""Domain Types — verifies the product value and its lifecycle state.

Tests:
    - ProductData is transient until it carries an id
    - ProductData is immutable; with_id returns a copy
    - with_id drops the version: a new identity has no concurrency token yet
    - FieldViolation serializes to a plain dict
"""

import dataclasses

import pytest

from catalog.core.domain_types import (
    FieldViolation, ProductData, ProductId, ProductState,
    MIN_PROFIT_MARGIN, MAX_PROFIT_MARGIN,
)


def test_new_product_is_transient():
    assert ProductData(name="A").state == ProductState.TRANSIENT


def test_product_with_id_is_persisted():
    assert ProductData(name="A").with_id(ProductId(1)).state == ProductState.PERSISTED


def test_with_id_does_not_mutate_original():
    product = ProductData(name="A")
    stored = product.with_id(7)
    assert product.id is None
    assert stored.id == 7
    assert stored.name == "A"


def test_with_id_clears_version():
    stored = ProductData(name="A", id=ProductId(1), version=3)
    assert stored.with_id(ProductId(2)).version is None


def test_product_data_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        ProductData().name = "changed"


def test_margin_bounds():
    assert MIN_PROFIT_MARGIN == 55
    assert MAX_PROFIT_MARGIN == 100


def test_field_violation_to_dict():
    violation = FieldViolation("stock", "Stock must be a positive value.")
    assert violation.to_dict() == {
        "field": "stock", "message": "Stock must be a positive value.",
    }
