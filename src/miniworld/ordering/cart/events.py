"""Domain events for the ShoppingCart aggregate."""

from protean.fields import Float, Identifier, Integer, String

from miniworld.domain import miniworld


@miniworld.event(part_of="ShoppingCart")
class CartItemAdded:
    __version__ = 1

    session_id: Identifier(required=True)
    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    line_quantity: Integer(required=True)
    cart_total: Float(required=True)


@miniworld.event(part_of="ShoppingCart")
class CartItemQuantityChanged:
    __version__ = 1

    session_id: Identifier(required=True)
    product_id: Identifier(required=True)
    previous_quantity: Integer(required=True)
    new_quantity: Integer(required=True)
    cart_total: Float(required=True)


@miniworld.event(part_of="ShoppingCart")
class CartItemRemoved:
    __version__ = 1

    session_id: Identifier(required=True)
    product_id: Identifier(required=True)
    cart_total: Float(required=True)


@miniworld.event(part_of="ShoppingCart")
class CartCleared:
    __version__ = 1

    session_id: Identifier(required=True)
    reason: String()
