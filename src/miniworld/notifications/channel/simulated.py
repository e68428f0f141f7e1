"""Simulated email adapter: logs messages instead of sending them.

Used in development and tests, and in any environment without an email
provider key. Sent messages are kept in memory for inspection.
"""

import time

from miniworld.notifications.channel.email_port import DeliveryResult, EmailPort
from miniworld.utils.logging import get_logger

logger = get_logger(__name__)


class SimulatedEmailAdapter(EmailPort):
    def __init__(self):
        self.sent_emails: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Email delivery failed"):
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> DeliveryResult:
        if not self.should_succeed:
            logger.warning("email_simulation_failed", to=to, subject=subject, error=self.failure_reason)
            return {"message_id": None, "status": "failed", "error": self.failure_reason}

        message_id = f"sim_{int(time.time() * 1000)}"
        self.sent_emails.append(
            {
                "message_id": message_id,
                "to": to,
                "subject": subject,
                "body": body,
                "html_body": html_body,
            }
        )
        logger.info(
            "email_simulated",
            to=to,
            subject=subject,
            html_length=len(html_body or ""),
            message_id=message_id,
        )
        return {"message_id": message_id, "status": "sent"}

    def reset(self):
        self.sent_emails.clear()
        self.should_succeed = True
        self.failure_reason = "Email delivery failed"
