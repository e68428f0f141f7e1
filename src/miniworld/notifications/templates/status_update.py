"""Status update template: sent when an order moves to a new status."""

from html import escape

from miniworld.notifications.templates.layout import SIGNATURE, wrap_html

_STATUS_MESSAGES = {
    "pending": "Your order has been received and is awaiting confirmation.",
    "confirmed": "Your order has been confirmed and is being prepared for processing.",
    "processing": "Your order is currently being processed and will be shipped soon.",
    "shipped": "Great news! Your order has been shipped{tracking}.",
    "delivered": (
        "Your order has been successfully delivered! We hope you and your little one love your new items."
    ),
    "cancelled": "Your order has been cancelled as requested.",
}


def status_message(new_status: str, tracking_number: str | None = None) -> str:
    template = _STATUS_MESSAGES.get(new_status)
    if template is None:
        return f"Your order status has been updated to {new_status}."
    tracking = f" with tracking number: {tracking_number}" if tracking_number else ""
    return template.format(tracking=tracking)


class StatusUpdateTemplate:
    email_type = "status_update"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        old_status = context.get("old_status", "")
        new_status = context.get("new_status", "")
        name = context.get("customer_name") or "Customer"
        tracking_number = context.get("tracking_number")
        delivery = context.get("estimated_delivery")
        message = status_message(new_status, tracking_number)
        transition = f"{old_status.upper()} → {new_status.upper()}"

        extra = ""
        if new_status == "shipped" and tracking_number:
            extra = f"Tracking Number: {tracking_number}\nEstimated Delivery: {delivery or 'N/A'}\n\n"
        if new_status == "delivered":
            extra = "Thank you for choosing MiniWorld! We hope you have a wonderful experience with your purchase.\n\n"

        body = (
            f"Dear {name},\n\n"
            f"Your order #{order_number} status has been updated.\n\n"
            f"Status: {transition}\n\n"
            f"{message}\n\n"
            f"{extra}"
            "You can always check your order status in your account dashboard.\n\n"
            f"{SIGNATURE}"
        )
        content = (
            f"<h3>Dear {escape(name)},</h3>"
            '<div class="highlight">'
            f"<h3>Order #{escape(order_number)}</h3>"
            f'<p style="font-size: 18px;"><strong>{escape(transition)}</strong></p>'
            f"<p>{escape(message)}</p>"
            "</div>"
            "<p>You can always check your order status in your account dashboard.</p>"
        )
        return {
            "subject": f"Order Update - #{order_number} is now {new_status}",
            "body": body,
            "html": wrap_html("Order Status Update", content),
        }
