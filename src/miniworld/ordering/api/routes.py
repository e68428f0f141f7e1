"""FastAPI endpoints for carts, checkout and orders."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from miniworld import services
from miniworld.identity.auth.dependencies import optional_customer, require_admin
from miniworld.identity.auth.sessions import CustomerSession
from miniworld.ordering.api.schemas import (
    AddToCartRequest,
    AttachTrackingRequest,
    CheckoutRequest,
    OrderIdResponse,
    PriceQuoteResponse,
    StatusResponse,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
)
from miniworld.ordering.cart.items import (
    AddToCart,
    ClearCart,
    RemoveFromCart,
    UpdateCartQuantity,
    load_cart,
)
from miniworld.ordering.order import queries
from miniworld.ordering.order.placement import PlaceOrder
from miniworld.ordering.order.status import AttachTrackingNumber, UpdateOrderStatus
from miniworld.settings.pricing import price_order

cart_router = APIRouter(prefix="/carts", tags=["cart"])
checkout_router = APIRouter(tags=["checkout"])
order_router = APIRouter(prefix="/orders", tags=["orders"])
admin_order_router = APIRouter(prefix="/admin/orders", tags=["admin-orders"], dependencies=[Depends(require_admin)])


def _cart_view(session_id: str) -> dict:
    return load_cart(session_id).to_dict()


# --- Cart endpoints ---


@cart_router.get("/{session_id}")
async def get_cart(session_id: str) -> dict:
    return _cart_view(session_id)


@cart_router.post("/{session_id}/items", status_code=201)
async def add_to_cart(session_id: str, body: AddToCartRequest) -> dict:
    command = AddToCart(session_id=session_id, product_id=body.product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_view(session_id)


@cart_router.put("/{session_id}/items/{product_id}")
async def update_cart_quantity(session_id: str, product_id: str, body: UpdateCartQuantityRequest) -> dict:
    command = UpdateCartQuantity(session_id=session_id, product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_view(session_id)


@cart_router.delete("/{session_id}/items/{product_id}")
async def remove_from_cart(session_id: str, product_id: str) -> dict:
    current_domain.process(RemoveFromCart(session_id=session_id, product_id=product_id), asynchronous=False)
    return _cart_view(session_id)


@cart_router.delete("/{session_id}")
async def clear_cart(session_id: str) -> dict:
    current_domain.process(ClearCart(session_id=session_id, reason="cleared"), asynchronous=False)
    return _cart_view(session_id)


# --- Checkout endpoints ---


@checkout_router.get("/pricing/quote", response_model=PriceQuoteResponse)
async def price_quote(subtotal: float = Query(..., ge=0)) -> PriceQuoteResponse:
    pricing = price_order(subtotal, services.settings_cache().get())
    return PriceQuoteResponse(**asdict(pricing))


@checkout_router.post("/checkout/{session_id}", status_code=201, response_model=OrderIdResponse)
async def checkout(
    session_id: str,
    body: CheckoutRequest,
    customer: CustomerSession | None = Depends(optional_customer),
) -> OrderIdResponse:
    command = PlaceOrder(
        session_id=session_id,
        customer_id=customer.customer_id if customer else None,
        full_name=body.full_name,
        phone=body.phone,
        email=body.email,
        address=body.address,
        city=body.city,
        state=body.state,
        zip_code=body.zip_code,
        country=body.country,
        payment_method=body.payment_method,
        payment_account_id=body.payment_account_id,
        wallet_number=body.wallet_number,
    )
    order_id = current_domain.process(command, asynchronous=False)
    current_domain.process(ClearCart(session_id=session_id, reason="order_placed"), asynchronous=False)

    order = queries.get_order(order_id)
    return OrderIdResponse(
        order_id=order_id,
        order_number=order.order_number,
        status=order.status,
        total=order.total,
    )


# --- Order endpoints ---


@order_router.get("")
async def customer_orders(email: str) -> list[dict]:
    return [order.to_dict() for order in queries.orders_for_customer(email)]


@order_router.get("/number/{order_number}")
async def order_by_number(order_number: str) -> dict:
    return queries.get_order_by_number(order_number).to_dict()


@order_router.get("/{order_id}")
async def order_detail(order_id: str) -> dict:
    return queries.get_order(order_id).to_dict()


# --- Back-office endpoints ---


@admin_order_router.get("")
async def list_orders(status: str | None = None) -> list[dict]:
    return [order.to_dict() for order in queries.list_orders(status)]


@admin_order_router.get("/stats")
async def order_stats() -> dict:
    return queries.order_stats()


@admin_order_router.put("/{order_id}/status", response_model=StatusResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> StatusResponse:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return StatusResponse()


@admin_order_router.put("/{order_id}/tracking", response_model=StatusResponse)
async def attach_tracking_number(order_id: str, body: AttachTrackingRequest) -> StatusResponse:
    command = AttachTrackingNumber(
        order_id=order_id,
        tracking_number=body.tracking_number,
        estimated_delivery=body.estimated_delivery,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
