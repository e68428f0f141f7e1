"""Shared BDD fixtures and step definitions for ordering."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

from miniworld.catalogue.product.product import Product
from miniworld.ordering.cart.cart import ShoppingCart


@pytest.fixture()
def products():
    return {}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@given(parsers.cfparse('a product "{name}" priced at {price:d} with {stock:d} units in stock'))
def product_in_catalogue(products, name, price, stock):
    products[name] = Product.create(name=name, price=price, category="0-6-months", stock_quantity=stock)


@given("an empty cart", target_fixture="cart")
def empty_cart():
    return ShoppingCart(session_id="sess-bdd")


@given(parsers.cfparse('{quantity:d} units of "{name}" are in the cart'))
def units_in_cart(cart, products, quantity, name):
    cart.add_item(products[name], quantity)


@then(parsers.cfparse("the cart total is {total:d}"))
def cart_total(cart, total):
    assert cart.total == total


@then(parsers.cfparse("the cart holds {count:d} items"))
def cart_item_count(cart, count):
    assert cart.item_count == count


@then("the cart is empty")
def cart_is_empty(cart):
    assert len(cart.items) == 0
    assert cart.item_count == 0


@then(parsers.cfparse('the cart rejects the change with "{message}"'))
def cart_rejects_change(error, message):
    assert isinstance(error["exc"], ValidationError)
    assert error["exc"].messages["quantity"] == [message]
