"""Order confirmation template: sent when an order is placed."""

from html import escape

from miniworld.notifications.templates.layout import SIGNATURE, wrap_html
from miniworld.settings.currency import format_pkr

_METHOD_LABELS = {
    "cash_on_delivery": "Cash on Delivery",
    "bank_transfer": "Bank Transfer",
    "jazzcash": "JazzCash",
    "easypaisa": "EasyPaisa",
    "credit_card": "Credit Card",
}


class OrderConfirmationTemplate:
    email_type = "order_confirmation"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        method = _METHOD_LABELS.get(context.get("payment_method"), "Bank Transfer")
        items = context.get("items") or []
        address = context.get("shipping_address") or {}
        delivery = context.get("estimated_delivery") or "Within 7 business days"
        total = format_pkr(context.get("total"))

        item_lines = "\n".join(f"- {item['product_name']} (Qty: {item['quantity']})" for item in items) or "No items"
        body = (
            "Thank you for your order! We're excited to get your baby essentials to you.\n\n"
            "ORDER DETAILS:\n"
            f"- Order Number: {order_number}\n"
            f"- Total: {total}\n"
            f"- Payment Method: {method}\n\n"
            f"ITEMS ORDERED:\n{item_lines}\n\n"
            "SHIPPING ADDRESS:\n"
            f"{address.get('full_name') or 'N/A'}\n"
            f"{address.get('address') or 'N/A'}\n"
            f"{address.get('city') or 'N/A'}, {address.get('state') or 'N/A'} {address.get('zip_code') or 'N/A'}\n\n"
            f"ESTIMATED DELIVERY: {delivery}\n\n"
            "We'll keep you updated on your order status via email.\n\n"
            "Thank you for choosing MiniWorld!\n\n"
            f"{SIGNATURE}"
        )

        rows = "".join(
            f"<li>{escape(item['product_name'])} (Qty: {item['quantity']})</li>" for item in items
        )
        content = (
            f"<h3>Dear {escape(address.get('full_name') or 'Customer')},</h3>"
            "<p>Thank you for your order! We're excited to get your baby essentials to you.</p>"
            '<div class="highlight">'
            f"<p><strong>Order Number:</strong> {escape(order_number)}</p>"
            f"<p><strong>Total:</strong> {escape(total)}</p>"
            f"<p><strong>Payment Method:</strong> {escape(method)}</p>"
            f"<ul>{rows}</ul>"
            f"<p><strong>Estimated Delivery:</strong> {escape(delivery)}</p>"
            "</div>"
        )
        return {
            "subject": f"Order Confirmation - {order_number}",
            "body": body,
            "html": wrap_html("Order Confirmation", content),
        }
