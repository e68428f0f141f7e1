"""Shared BDD fixtures and step definitions for the catalogue."""

import pytest
from pytest_bdd import given, parsers, then

from miniworld.catalogue.product.events import LowStockDetected
from miniworld.catalogue.product.product import Product


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@given(
    parsers.cfparse('a product "{name}" with {quantity:d} units and a low-stock threshold of {threshold:d}'),
    target_fixture="product",
)
def product_with_stock(name, quantity, threshold):
    product = Product.create(
        name=name,
        price=16650,
        category="0-6-months",
        stock_quantity=quantity,
        low_stock_threshold=threshold,
    )
    product._events.clear()
    return product


@then(parsers.cfparse('the product stock status is "{status}"'))
def product_stock_status(product, status):
    assert product.stock_status == status


@then(parsers.cfparse("the product has {quantity:d} units"))
def product_has_units(product, quantity):
    assert product.stock_quantity == quantity


@then("the product is not in stock")
def product_not_in_stock(product):
    assert product.in_stock is False


@then("a low stock alert is raised")
def low_stock_alert_raised(product):
    assert any(isinstance(e, LowStockDetected) for e in product._events)
