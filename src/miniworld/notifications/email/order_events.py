"""Order events → customer emails.

Emails are best-effort: a failure is logged and the order flow carries on.
"""

from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from miniworld import services
from miniworld.domain import miniworld
from miniworld.ordering.order.events import OrderPlaced, OrderStatusChanged
from miniworld.ordering.order.order import Order
from miniworld.utils.logging import get_logger

logger = get_logger(__name__)


@miniworld.event_handler(part_of=Order)
class OrderEmailHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced):
        try:
            order = current_domain.repository_for(Order).get(event.order_id)
            services.email_service().send_order_confirmation(order)
        except Exception as exc:
            logger.error("order_confirmation_email_failed", order_number=event.order_number, error=str(exc))

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged):
        try:
            order = current_domain.repository_for(Order).get(event.order_id)
            services.email_service().send_status_update(order, event.previous_status, event.new_status)
        except Exception as exc:
            logger.error("status_update_email_failed", order_number=event.order_number, error=str(exc))
