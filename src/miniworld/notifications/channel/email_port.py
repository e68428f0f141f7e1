"""Email channel port.

``EmailService`` talks to email providers only through this interface.
Adapters report the outcome in a :class:`DeliveryResult` and never raise
for a rejected message; only programming errors escape ``send``.
"""

from abc import ABC, abstractmethod
from typing import TypedDict


class DeliveryResult(TypedDict, total=False):
    message_id: str | None
    status: str  # "sent" or "failed"
    error: str


class EmailPort(ABC):
    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> DeliveryResult:
        """Deliver one message to a single recipient."""
        ...
