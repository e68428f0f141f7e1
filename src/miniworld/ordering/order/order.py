"""Order aggregate.

An order is a snapshot taken at checkout: its lines, address, payment
selection and totals never change afterwards. Only the fulfilment fields
move: ``status`` (through the transitions below), the tracking number and
the estimated delivery date.

State machine:
    pending → confirmed → processing → shipped → delivered
    pending / confirmed → cancelled
"""

import random
import time
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from miniworld.domain import miniworld


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentMethod(Enum):
    CASH_ON_DELIVERY = "cash_on_delivery"
    BANK_TRANSFER = "bank_transfer"
    JAZZCASH = "jazzcash"
    EASYPAISA = "easypaisa"
    CREDIT_CARD = "credit_card"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}

_PAYMENT_NOTES = {
    PaymentMethod.CASH_ON_DELIVERY: "Cash on Delivery - Payment due upon delivery",
    PaymentMethod.BANK_TRANSFER: "Bank Transfer - Awaiting payment confirmation",
    PaymentMethod.JAZZCASH: "JazzCash - Awaiting payment confirmation",
    PaymentMethod.EASYPAISA: "EasyPaisa - Awaiting payment confirmation",
    PaymentMethod.CREDIT_CARD: "Credit Card - Awaiting payment confirmation",
}


_WALLET_METHODS = frozenset({PaymentMethod.JAZZCASH.value, PaymentMethod.EASYPAISA.value})


def generate_order_number() -> str:
    """``MW`` + epoch milliseconds + a random 0-999 suffix. Not guaranteed unique."""
    return f"MW{int(time.time() * 1000)}{random.randint(0, 999)}"


def estimate_delivery(placed_at: datetime) -> datetime:
    return placed_at + timedelta(days=random.randint(3, 7))


def initial_status(payment_method: str) -> OrderStatus:
    if payment_method == PaymentMethod.CASH_ON_DELIVERY.value:
        return OrderStatus.CONFIRMED
    return OrderStatus.PENDING


def payment_note(payment_method: str) -> str:
    return _PAYMENT_NOTES[PaymentMethod(payment_method)]


@miniworld.value_object(part_of="Order")
class ShippingAddress:
    full_name: String(required=True, max_length=255)
    phone: String(required=True, max_length=30)
    email: String(required=True, max_length=255)
    address: String(required=True, max_length=500)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    zip_code: String(max_length=20)
    country: String(max_length=100, default="Pakistan")


@miniworld.value_object(part_of="Order")
class PaymentSelection:
    """Payment method chosen at checkout with the merchant account shown to the shopper."""

    method: String(required=True, choices=PaymentMethod)
    account_id: Identifier()
    account_name: String(max_length=255)
    account_number: String(max_length=100)
    bank_name: String(max_length=255)
    wallet_number: String(max_length=20)
    transaction_ref: String(max_length=50)


@miniworld.entity(part_of="Order")
class OrderItem:
    product_id: Identifier(required=True)
    product_name: String(required=True, max_length=255)
    unit_price: Float(required=True, min_value=0.0)
    quantity: Integer(required=True, min_value=1)
    line_total: Float(required=True, min_value=0.0)
    image: String(max_length=1000)


@miniworld.aggregate
class Order:
    order_number: String(required=True, max_length=30)
    customer_id: Identifier()
    items: HasMany(OrderItem)
    shipping_address: ValueObject(ShippingAddress, required=True)
    payment: ValueObject(PaymentSelection, required=True)
    subtotal: Float(required=True, min_value=0.0)
    tax: Float(required=True, min_value=0.0)
    shipping: Float(required=True, min_value=0.0)
    total: Float(required=True, min_value=0.0)
    currency: String(max_length=3, default="PKR")
    status: String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    tracking_number: String(max_length=100)
    estimated_delivery: DateTime()
    notes: Text()
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @property
    def customer_email(self) -> str:
        return self.shipping_address.email

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @classmethod
    def place(cls, lines, shipping_address, payment, pricing, customer_id=None):
        """Record a new order.

        ``lines`` are dicts with product_id, product_name, unit_price,
        quantity and image. ``pricing`` is the server-side price breakdown
        for the lines' subtotal.
        """
        from miniworld.ordering.order.events import OrderPlaced

        if not lines:
            raise ValidationError({"items": ["Cannot place an order with an empty cart"]})

        now = datetime.now(UTC)
        status = initial_status(payment.method)
        order = cls(
            order_number=generate_order_number(),
            customer_id=customer_id,
            items=[
                OrderItem(
                    product_id=line["product_id"],
                    product_name=line["product_name"],
                    unit_price=line["unit_price"],
                    quantity=line["quantity"],
                    line_total=line["unit_price"] * line["quantity"],
                    image=line.get("image"),
                )
                for line in lines
            ],
            shipping_address=shipping_address,
            payment=payment,
            subtotal=pricing.subtotal,
            tax=pricing.tax,
            shipping=pricing.shipping,
            total=pricing.total,
            currency=pricing.currency,
            status=status.value,
            estimated_delivery=estimate_delivery(now),
            notes=payment_note(payment.method),
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                order_number=order.order_number,
                customer_id=customer_id,
                customer_email=shipping_address.email,
                customer_name=shipping_address.full_name,
                item_count=order.item_count,
                total=order.total,
                currency=order.currency,
                payment_method=payment.method,
                status=status.value,
                placed_at=now,
            )
        )
        return order

    def _assert_can_transition(self, target: OrderStatus):
        current = OrderStatus(self.status)
        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError(
                {"status": [f"Cannot transition from {current.value} to {target.value}"]}
            )

    def change_status(self, new_status: str):
        from miniworld.ordering.order.events import OrderStatusChanged

        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status: {new_status}"]}) from None

        self._assert_can_transition(target)

        previous = self.status
        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                order_number=self.order_number,
                customer_email=self.customer_email,
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )

    def attach_tracking_number(self, tracking_number: str, estimated_delivery: datetime | None = None):
        from miniworld.ordering.order.events import TrackingNumberAttached

        if not tracking_number or not tracking_number.strip():
            raise ValidationError({"tracking_number": ["Tracking number is required"]})
        if self.status == OrderStatus.CANCELLED.value:
            raise ValidationError({"tracking_number": ["Cannot track a cancelled order"]})

        self.tracking_number = tracking_number.strip()
        if estimated_delivery is not None:
            self.estimated_delivery = estimated_delivery
        self.updated_at = datetime.now(UTC)

        self.raise_(
            TrackingNumberAttached(
                order_id=self.id,
                order_number=self.order_number,
                tracking_number=self.tracking_number,
                estimated_delivery=self.estimated_delivery,
            )
        )

    def assert_awaiting_wallet_payment(self):
        if self.payment.method not in _WALLET_METHODS:
            raise ValidationError({"payment": ["Order was not placed for mobile wallet payment"]})
        if self.status != OrderStatus.PENDING.value:
            raise ValidationError({"status": [f"Order is {self.status} and no longer accepts payment"]})

    def record_wallet_payment(self, transaction_ref: str, amount: float):
        """Store the gateway reference and confirm a pending wallet order.

        The paid amount must match the order total to the paisa.
        """
        from miniworld.ordering.order.events import WalletPaymentRecorded

        self.assert_awaiting_wallet_payment()
        if round(amount * 100) != round(self.total * 100):
            raise ValidationError({"amount": ["Paid amount does not match the order total"]})

        self.payment = PaymentSelection(
            method=self.payment.method,
            account_id=self.payment.account_id,
            account_name=self.payment.account_name,
            account_number=self.payment.account_number,
            bank_name=self.payment.bank_name,
            wallet_number=self.payment.wallet_number,
            transaction_ref=transaction_ref,
        )
        self.raise_(
            WalletPaymentRecorded(
                order_id=self.id,
                order_number=self.order_number,
                transaction_ref=transaction_ref,
                amount=amount,
            )
        )
        self.change_status(OrderStatus.CONFIRMED.value)

    def to_dict(self) -> dict:
        address = self.shipping_address
        payment = self.payment
        return {
            "id": str(self.id),
            "order_number": self.order_number,
            "customer_id": str(self.customer_id) if self.customer_id else None,
            "items": [
                {
                    "product_id": str(item.product_id),
                    "product_name": item.product_name,
                    "unit_price": item.unit_price,
                    "quantity": item.quantity,
                    "line_total": item.line_total,
                    "image": item.image,
                }
                for item in self.items
            ],
            "shipping_address": {
                "full_name": address.full_name,
                "phone": address.phone,
                "email": address.email,
                "address": address.address,
                "city": address.city,
                "state": address.state,
                "zip_code": address.zip_code,
                "country": address.country,
            },
            "payment": {
                "method": payment.method,
                "account_id": str(payment.account_id) if payment.account_id else None,
                "account_name": payment.account_name,
                "account_number": payment.account_number,
                "bank_name": payment.bank_name,
                "wallet_number": payment.wallet_number,
                "transaction_ref": payment.transaction_ref,
            },
            "subtotal": self.subtotal,
            "tax": self.tax,
            "shipping": self.shipping,
            "total": self.total,
            "currency": self.currency,
            "status": self.status,
            "tracking_number": self.tracking_number,
            "estimated_delivery": self.estimated_delivery.isoformat() if self.estimated_delivery else None,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
