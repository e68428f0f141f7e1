"""Resend email adapter (https://resend.com)."""

import requests

from miniworld.notifications.channel.email_port import DeliveryResult, EmailPort
from miniworld.utils.logging import get_logger

logger = get_logger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class ResendEmailAdapter(EmailPort):
    def __init__(self, api_key: str, from_address: str, environment: str = "production", timeout: float = 10.0):
        self.api_key = api_key
        self.from_address = from_address
        self.environment = environment
        self.timeout = timeout

    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> DeliveryResult:
        payload = {
            "from": self.from_address,
            "to": [to],
            "subject": subject,
            "html": html_body or body,
            "text": body,
            "tags": [
                {"name": "source", "value": "miniworld"},
                {"name": "environment", "value": self.environment},
            ],
        }
        try:
            response = requests.post(
                RESEND_API_URL,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("resend_request_failed", to=to, error=str(exc))
            return {"message_id": None, "status": "failed", "error": str(exc)}

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.ok:
            error = data.get("message") or "Failed to send email"
            logger.error("resend_api_error", to=to, status_code=response.status_code, error=error)
            return {"message_id": None, "status": "failed", "error": error}

        logger.info("email_sent", to=to, message_id=data.get("id"))
        return {"message_id": data.get("id"), "status": "sent"}
