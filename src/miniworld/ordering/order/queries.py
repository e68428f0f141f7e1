"""Order read helpers for the storefront and the back office."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from miniworld.ordering.order.order import Order, OrderStatus


def list_orders(status: str | None = None) -> list[Order]:
    """All orders, newest first, optionally narrowed to one status."""
    query = current_domain.repository_for(Order)._dao.query
    if status:
        query = query.filter(status=status)
    return query.order_by("-created_at").all().items


def get_order(order_id: str) -> Order:
    return current_domain.repository_for(Order).get(order_id)


def get_order_by_number(order_number: str) -> Order:
    order = current_domain.repository_for(Order)._dao.query.filter(order_number=order_number).all().first
    if order is None:
        raise ObjectNotFoundError(f"Order {order_number} not found")
    return order


def orders_for_customer(email: str) -> list[Order]:
    needle = email.strip().lower()
    return [order for order in list_orders() if order.customer_email.lower() == needle]


def order_stats() -> dict:
    orders = list_orders()
    by_status: dict[str, int] = {}
    for order in orders:
        by_status[order.status] = by_status.get(order.status, 0) + 1
    revenue = sum(order.total for order in orders if order.status != OrderStatus.CANCELLED.value)
    return {"total_orders": len(orders), "by_status": by_status, "revenue": revenue}
