"""EmailLog aggregate: one record per attempted email."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, String, Text
from protean.utils.globals import current_domain

from miniworld.domain import miniworld


class EmailType(Enum):
    ORDER_CONFIRMATION = "order_confirmation"
    STATUS_UPDATE = "status_update"
    SHIPPING_NOTIFICATION = "shipping_notification"
    TEST = "test"
    NEWSLETTER = "newsletter"


class EmailStatus(Enum):
    SENT = "sent"
    FAILED = "failed"


@miniworld.aggregate
class EmailLog:
    recipient: String(required=True, max_length=255)
    subject: String(required=True, max_length=500)
    body: Text()
    email_type: String(required=True, choices=EmailType)
    status: String(required=True, choices=EmailStatus)
    message_id: String(max_length=255)
    error: Text()
    order_number: String(max_length=30)
    sent_at: DateTime(default=lambda: datetime.now(UTC))

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "recipient": self.recipient,
            "subject": self.subject,
            "email_type": self.email_type,
            "status": self.status,
            "message_id": self.message_id,
            "error": self.error,
            "order_number": self.order_number,
            "sent_at": self.sent_at.isoformat() if self.sent_at else None,
        }


def list_email_logs(email_type: str | None = None) -> list[EmailLog]:
    query = current_domain.repository_for(EmailLog)._dao.query
    if email_type:
        query = query.filter(email_type=email_type)
    return query.order_by("-sent_at").all().items


def email_stats() -> dict:
    logs = list_email_logs()
    total = len(logs)
    sent = sum(1 for log in logs if log.status == EmailStatus.SENT.value)
    failed = total - sent
    return {
        "total": total,
        "sent": sent,
        "failed": failed,
        "success_rate": round(sent / total * 100, 1) if total else 0.0,
    }
