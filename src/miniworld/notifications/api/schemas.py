"""Pydantic request schemas for the Notifications API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class NewsletterSignupRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"email": "parent@example.com"}]}}

    email: str = Field(..., min_length=3, max_length=255)


class TestEmailRequest(BaseModel):
    to: str = Field(..., min_length=3, max_length=255)


class DeliveryResponse(BaseModel):
    sent: bool
