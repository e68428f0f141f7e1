"""BDD tests for the session cart."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, when

scenarios("features/cart_items.feature")


@when(parsers.re(r'(?P<quantity>\d+) units? of "(?P<name>[^"]+)" (?:is|are) added to the cart'))
def add_to_cart(cart, products, quantity, name, error):
    try:
        cart.add_item(products[name], int(quantity))
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse('the quantity of "{name}" is changed to {quantity:d}'))
def change_quantity(cart, products, name, quantity):
    cart.update_quantity(products[name].id, quantity)
