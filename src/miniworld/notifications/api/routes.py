"""FastAPI endpoints for newsletter signup and the communications console."""

from fastapi import APIRouter, Depends

from miniworld import services
from miniworld.identity.auth.dependencies import require_admin
from miniworld.notifications.api.schemas import DeliveryResponse, NewsletterSignupRequest, TestEmailRequest
from miniworld.notifications.email.email_log import email_stats, list_email_logs

newsletter_router = APIRouter(prefix="/newsletter", tags=["newsletter"])
admin_communications_router = APIRouter(
    prefix="/admin/communications", tags=["admin-communications"], dependencies=[Depends(require_admin)]
)


@newsletter_router.post("", status_code=201, response_model=DeliveryResponse)
async def newsletter_signup(body: NewsletterSignupRequest) -> DeliveryResponse:
    return DeliveryResponse(sent=services.email_service().send_newsletter_confirmation(body.email))


@admin_communications_router.post("/test-email", response_model=DeliveryResponse)
async def send_test_email(body: TestEmailRequest) -> DeliveryResponse:
    return DeliveryResponse(sent=services.email_service().send_test_email(body.to))


@admin_communications_router.get("/email-logs")
async def email_logs(email_type: str | None = None) -> list[dict]:
    return [log.to_dict() for log in list_email_logs(email_type)]


@admin_communications_router.get("/email-stats")
async def delivery_stats() -> dict:
    return email_stats()
