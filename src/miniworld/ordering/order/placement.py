"""Checkout: turn a session cart into an order.

Placement re-reads every product so the order reflects live stock and
refuses carts whose price snapshot no longer matches the catalogue.
Totals are priced here from the cached store settings; the client never
supplies them. Clearing the cart is a separate command the caller issues
once placement has returned.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from miniworld import services
from miniworld.catalogue.product.product import Product
from miniworld.domain import miniworld
from miniworld.ordering.cart.cart import ShoppingCart
from miniworld.ordering.cart.errors import InsufficientStock, OutOfStock
from miniworld.ordering.order.order import Order, PaymentMethod, PaymentSelection, ShippingAddress
from miniworld.payments.account.account import PaymentAccount
from miniworld.settings.currency import format_pkr
from miniworld.settings.pricing import price_order
from miniworld.utils.logging import get_logger

logger = get_logger(__name__)


@miniworld.command(part_of="Order")
class PlaceOrder:
    session_id: Identifier(required=True)
    customer_id: Identifier()
    full_name: String(required=True, max_length=255)
    phone: String(required=True, max_length=30)
    email: String(required=True, max_length=255)
    address: String(required=True, max_length=500)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    zip_code: String(max_length=20)
    country: String(max_length=100)
    payment_method: String(required=True, max_length=30)
    payment_account_id: Identifier()
    wallet_number: String(max_length=20)


def _checkout_lines(cart: ShoppingCart) -> list[dict]:
    repo = current_domain.repository_for(Product)
    lines = []
    for item in cart.items:
        product = repo.get(item.product_id)
        if product.stock_quantity == 0:
            raise OutOfStock(product_id=product.id)
        if item.quantity > product.stock_quantity:
            raise InsufficientStock(product.stock_quantity, product_id=product.id)
        if round(item.unit_price * 100) != round(product.price * 100):
            raise ValidationError(
                {"items": [f"The price of {product.name} is now {format_pkr(product.price)}; please review your cart"]}
            )
        lines.append(
            {
                "product_id": product.id,
                "product_name": product.name,
                "unit_price": product.price,
                "quantity": item.quantity,
                "image": product.primary_image,
            }
        )
    return lines


def _payment_selection(command) -> PaymentSelection:
    try:
        method = PaymentMethod(command.payment_method)
    except ValueError:
        raise ValidationError({"payment_method": [f"Unsupported payment method: {command.payment_method}"]}) from None

    account = None
    if command.payment_account_id:
        account = current_domain.repository_for(PaymentAccount).get(command.payment_account_id)
        if not account.is_active:
            raise ValidationError({"payment_account_id": ["Selected payment account is not active"]})
    elif method == PaymentMethod.BANK_TRANSFER:
        raise ValidationError({"payment_account_id": ["Select an account for bank transfer"]})

    if method in (PaymentMethod.JAZZCASH, PaymentMethod.EASYPAISA) and not command.wallet_number:
        raise ValidationError({"wallet_number": ["Mobile wallet number is required"]})

    return PaymentSelection(
        method=method.value,
        account_id=account.id if account else None,
        account_name=account.account_name if account else None,
        account_number=account.account_number if account else None,
        bank_name=account.bank_name if account else None,
        wallet_number=command.wallet_number,
    )


@miniworld.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        try:
            cart = current_domain.repository_for(ShoppingCart).get(command.session_id)
        except ObjectNotFoundError:
            cart = None
        if cart is None or not cart.items:
            raise ValidationError({"items": ["Cannot place an order with an empty cart"]})

        lines = _checkout_lines(cart)
        payment = _payment_selection(command)
        address = ShippingAddress(
            full_name=command.full_name,
            phone=command.phone,
            email=command.email,
            address=command.address,
            city=command.city,
            state=command.state,
            zip_code=command.zip_code,
            country=command.country or "Pakistan",
        )

        subtotal = sum(line["unit_price"] * line["quantity"] for line in lines)
        pricing = price_order(subtotal, services.settings_cache().get())

        order = Order.place(
            lines=lines,
            shipping_address=address,
            payment=payment,
            pricing=pricing,
            customer_id=command.customer_id,
        )
        current_domain.repository_for(Order).add(order)
        logger.info(
            "order_placed",
            order_id=str(order.id),
            order_number=order.order_number,
            total=order.total,
            status=order.status,
        )
        return str(order.id)
