"""Template registry: maps email types to template classes."""

from miniworld.notifications.templates.diagnostic import DiagnosticEmailTemplate
from miniworld.notifications.templates.newsletter import NewsletterTemplate
from miniworld.notifications.templates.order_confirmation import OrderConfirmationTemplate
from miniworld.notifications.templates.status_update import StatusUpdateTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    OrderConfirmationTemplate.email_type: OrderConfirmationTemplate,
    StatusUpdateTemplate.email_type: StatusUpdateTemplate,
    DiagnosticEmailTemplate.email_type: DiagnosticEmailTemplate,
    NewsletterTemplate.email_type: NewsletterTemplate,
}


def render(email_type: str, context: dict) -> dict:
    return TEMPLATE_REGISTRY[email_type].render(context)
