"""EmailService: render a template, dispatch it, record the attempt.

Sending is best-effort. Every operation returns ``True`` or ``False`` and
never raises; failures are logged and recorded in the email log.
"""

from datetime import UTC, datetime

from protean.utils.globals import current_domain

from miniworld.notifications.channel.email_port import EmailPort
from miniworld.notifications.email.email_log import EmailLog, EmailStatus, EmailType
from miniworld.notifications.templates import render
from miniworld.utils.logging import get_logger

logger = get_logger(__name__)


def _order_context(order) -> dict:
    address = order.shipping_address
    return {
        "order_number": order.order_number,
        "customer_name": address.full_name,
        "total": order.total,
        "payment_method": order.payment.method,
        "items": [{"product_name": item.product_name, "quantity": item.quantity} for item in order.items],
        "shipping_address": {
            "full_name": address.full_name,
            "address": address.address,
            "city": address.city,
            "state": address.state,
            "zip_code": address.zip_code,
        },
        "tracking_number": order.tracking_number,
        "estimated_delivery": order.estimated_delivery.strftime("%d/%m/%Y") if order.estimated_delivery else None,
    }


class EmailService:
    def __init__(self, adapter: EmailPort, from_address: str = "support@minihubpk.com"):
        self.adapter = adapter
        self.from_address = from_address

    def send_order_confirmation(self, order) -> bool:
        if not order.order_number or not order.shipping_address or not order.shipping_address.email:
            logger.error("order_confirmation_missing_details", order_id=str(order.id))
            return False
        return self._deliver(
            EmailType.ORDER_CONFIRMATION,
            order.shipping_address.email,
            _order_context(order),
            order_number=order.order_number,
        )

    def send_status_update(self, order, old_status: str, new_status: str) -> bool:
        context = _order_context(order)
        context.update(old_status=old_status, new_status=new_status)
        return self._deliver(
            EmailType.STATUS_UPDATE,
            order.shipping_address.email,
            context,
            order_number=order.order_number,
        )

    def send_test_email(self, to: str) -> bool:
        context = {
            "sent_at": datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC"),
            "from_address": self.from_address,
        }
        return self._deliver(EmailType.TEST, to, context)

    def send_newsletter_confirmation(self, email: str) -> bool:
        return self._deliver(EmailType.NEWSLETTER, email, {"email": email})

    def _deliver(self, email_type: EmailType, to: str, context: dict, order_number: str | None = None) -> bool:
        message = render(email_type.value, context)
        try:
            result = self.adapter.send(to, message["subject"], message["body"], html_body=message["html"])
        except Exception as exc:
            logger.error("email_dispatch_failed", email_type=email_type.value, to=to, error=str(exc))
            result = {"message_id": None, "status": EmailStatus.FAILED.value, "error": str(exc)}

        sent = result.get("status") == EmailStatus.SENT.value
        current_domain.repository_for(EmailLog).add(
            EmailLog(
                recipient=to,
                subject=message["subject"],
                body=message["body"],
                email_type=email_type.value,
                status=EmailStatus.SENT.value if sent else EmailStatus.FAILED.value,
                message_id=result.get("message_id"),
                error=result.get("error"),
                order_number=order_number,
            )
        )

        if sent:
            logger.info("email_sent", email_type=email_type.value, to=to, message_id=result.get("message_id"))
        else:
            logger.warning("email_failed", email_type=email_type.value, to=to, error=result.get("error"))
        return sent
