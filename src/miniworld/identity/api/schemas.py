"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

import datetime

from pydantic import BaseModel, Field

# --- Customer Request Schemas ---


class RegisterCustomerRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"email": "ayesha@example.com", "name": "Ayesha Khan", "mobile": "03001234567"}]
        }
    }

    email: str = Field(..., min_length=3, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    mobile: str | None = Field(None, max_length=20)
    date_of_birth: datetime.date | None = None


class UpdateCustomerProfileRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    mobile: str | None = Field(None, max_length=20)
    date_of_birth: datetime.date | None = None
    addresses: list[dict] | None = None


# --- Admin Request Schemas ---


class CreateAdminRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    mobile: str | None = Field(None, max_length=20)


class UpdateAdminRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    mobile: str | None = Field(None, max_length=20)
    role: str | None = None


# --- Response Schemas ---


class CustomerIdResponse(BaseModel):
    customer_id: str


class NewAdminResponse(BaseModel):
    admin_id: str
    temp_password: str


class StatusResponse(BaseModel):
    status: str = "ok"
