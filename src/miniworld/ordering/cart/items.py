"""Cart item management: commands and handler.

Every command loads the product from the catalogue so stock checks run
against live stock, not against the snapshot stored on the cart line.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from miniworld.catalogue.product.product import Product
from miniworld.domain import miniworld
from miniworld.ordering.cart.cart import ShoppingCart


@miniworld.command(part_of="ShoppingCart")
class AddToCart:
    session_id: Identifier(required=True)
    product_id: Identifier(required=True)
    quantity: Integer(required=True)


@miniworld.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    session_id: Identifier(required=True)
    product_id: Identifier(required=True)
    quantity: Integer(required=True)


@miniworld.command(part_of="ShoppingCart")
class RemoveFromCart:
    session_id: Identifier(required=True)
    product_id: Identifier(required=True)


@miniworld.command(part_of="ShoppingCart")
class ClearCart:
    session_id: Identifier(required=True)
    reason: String(max_length=50)


def load_cart(session_id) -> ShoppingCart:
    """Return the session's cart, or a new empty one if it has none yet."""
    try:
        return current_domain.repository_for(ShoppingCart).get(session_id)
    except ObjectNotFoundError:
        return ShoppingCart(session_id=session_id)


@miniworld.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        cart = load_cart(command.session_id)
        cart.add_item(product, command.quantity)
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        cart = load_cart(command.session_id)
        available = price = None
        if command.quantity > 0 and cart.line_for(command.product_id) is not None:
            product = current_domain.repository_for(Product).get(command.product_id)
            available, price = product.stock_quantity, product.price
        cart.update_quantity(command.product_id, command.quantity, available=available, price=price)
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = load_cart(command.session_id)
        cart.remove_item(command.product_id)
        current_domain.repository_for(ShoppingCart).add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = load_cart(command.session_id)
        cart.clear(reason=command.reason)
        current_domain.repository_for(ShoppingCart).add(cart)
