"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from miniworld.domain import miniworld


@miniworld.event(part_of="Order")
class OrderPlaced:
    """A customer checked out and an order was recorded."""

    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    customer_id: Identifier()
    customer_email: String(required=True)
    customer_name: String(required=True)
    item_count: Integer(required=True)
    total: Float(required=True)
    currency: String(required=True)
    payment_method: String(required=True)
    status: String(required=True)
    placed_at: DateTime(required=True)


@miniworld.event(part_of="Order")
class OrderStatusChanged:
    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    customer_email: String(required=True)
    previous_status: String(required=True)
    new_status: String(required=True)
    changed_at: DateTime(required=True)


@miniworld.event(part_of="Order")
class TrackingNumberAttached:
    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    tracking_number: String(required=True)
    estimated_delivery: DateTime()


@miniworld.event(part_of="Order")
class WalletPaymentRecorded:
    """The wallet gateway reported a successful payment for the order."""

    __version__ = 1

    order_id: Identifier(required=True)
    order_number: String(required=True)
    transaction_ref: String(required=True)
    amount: Float(required=True)
