"""Newsletter welcome template."""

from miniworld.notifications.templates.layout import SIGNATURE, wrap_html

_BENEFITS = (
    "Exclusive early access to new baby products",
    "Special offers and discounts just for subscribers",
    "Expert tips and advice for your little one",
    "Free shipping updates and promotions",
)


class NewsletterTemplate:
    email_type = "newsletter"

    @staticmethod
    def render(context: dict) -> dict:
        benefits = "\n".join(f"- {benefit}" for benefit in _BENEFITS)
        body = (
            "Welcome to MiniHub Newsletter!\n\n"
            "Thank you for subscribing to our newsletter! You'll now receive:\n"
            f"{benefits}\n\n"
            "Visit us at minihubpk.com to start shopping.\n\n"
            "Contact us: support@minihubpk.com | +923364599579\n\n"
            f"{SIGNATURE}"
        )
        items = "".join(f"<li>{benefit}</li>" for benefit in _BENEFITS)
        content = (
            "<p>Thank you for subscribing to our newsletter! You'll now receive:</p>"
            f"<ul>{items}</ul>"
            '<p>Visit us at <a href="https://minihubpk.com">minihubpk.com</a> to start shopping.</p>'
        )
        return {
            "subject": "Welcome to MiniHub Newsletter!",
            "body": body,
            "html": wrap_html("Welcome to MiniHub Newsletter!", content),
        }
