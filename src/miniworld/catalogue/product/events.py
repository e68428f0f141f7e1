"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from miniworld.domain import miniworld


@miniworld.event(part_of="Product")
class ProductAdded:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    stock_quantity: Integer(required=True)
    added_at: DateTime(required=True)


@miniworld.event(part_of="Product")
class ProductDetailsUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)


@miniworld.event(part_of="Product")
class StockLevelChanged:
    """Stock on hand changed, either set outright or adjusted by a delta."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_quantity: Integer(required=True)
    new_quantity: Integer(required=True)
    stock_status: String(required=True)
    reason: String()


@miniworld.event(part_of="Product")
class LowStockDetected:
    """Stock dropped to or below the product's low-stock threshold."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    current_quantity: Integer(required=True)
    threshold: Integer(required=True)
