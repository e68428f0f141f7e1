"""Pydantic request/response schemas for the Ordering API."""

from __future__ import annotations

import datetime

from pydantic import BaseModel, Field

# --- Cart Request Schemas ---


class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "smart-bottle-001", "quantity": 1}]}}

    product_id: str
    quantity: int = Field(1, ge=1)


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


# --- Checkout Request Schemas ---


class CheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "full_name": "Ayesha Khan",
                    "phone": "03001234567",
                    "email": "ayesha@example.com",
                    "address": "House 12, Street 4, F-7/2",
                    "city": "Islamabad",
                    "state": "ICT",
                    "zip_code": "44000",
                    "payment_method": "cash_on_delivery",
                }
            ]
        }
    }

    full_name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=30)
    email: str = Field(..., min_length=3, max_length=255)
    address: str = Field(..., min_length=1, max_length=500)
    city: str = Field(..., min_length=1, max_length=100)
    state: str | None = Field(None, max_length=100)
    zip_code: str | None = Field(None, max_length=20)
    country: str = Field("Pakistan", max_length=100)
    payment_method: str
    payment_account_id: str | None = None
    wallet_number: str | None = Field(None, max_length=20)


# --- Order Status Request Schemas ---


class UpdateOrderStatusRequest(BaseModel):
    status: str


class AttachTrackingRequest(BaseModel):
    tracking_number: str = Field(..., min_length=1, max_length=100)
    estimated_delivery: datetime.datetime | None = None


# --- Response Schemas ---


class OrderIdResponse(BaseModel):
    order_id: str
    order_number: str
    status: str
    total: float


class PriceQuoteResponse(BaseModel):
    subtotal: float
    tax: float
    shipping: float
    total: float
    currency: str


class StatusResponse(BaseModel):
    status: str = "ok"
