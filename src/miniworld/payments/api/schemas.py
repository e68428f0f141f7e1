"""Pydantic request schemas for the Payments API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AddPaymentAccountRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "account_name": "MiniWorld Pvt Ltd",
                    "account_number": "0123456789012",
                    "bank_name": "Meezan Bank",
                    "payment_method_type": "bank_transfer",
                    "iban": "PK36MEZN0001230123456789",
                }
            ]
        }
    }

    account_name: str = Field(..., min_length=1, max_length=255)
    account_number: str = Field(..., min_length=1, max_length=100)
    bank_name: str = Field(..., min_length=1, max_length=255)
    payment_method_type: str = "bank_transfer"
    routing_number: str | None = Field(None, max_length=50)
    swift_code: str | None = Field(None, max_length=20)
    iban: str | None = Field(None, max_length=50)
    mobile_number: str | None = Field(None, max_length=20)
    merchant_id: str | None = Field(None, max_length=100)
    branch_code: str | None = Field(None, max_length=20)
    description: str | None = None


class UpdatePaymentAccountRequest(BaseModel):
    account_name: str | None = Field(None, min_length=1, max_length=255)
    account_number: str | None = Field(None, min_length=1, max_length=100)
    bank_name: str | None = Field(None, min_length=1, max_length=255)
    payment_method_type: str | None = None
    routing_number: str | None = Field(None, max_length=50)
    swift_code: str | None = Field(None, max_length=20)
    iban: str | None = Field(None, max_length=50)
    mobile_number: str | None = Field(None, max_length=20)
    merchant_id: str | None = Field(None, max_length=100)
    branch_code: str | None = Field(None, max_length=20)
    description: str | None = None


class WalletCheckoutRequest(BaseModel):
    order_id: str
    mobile_number: str = Field(..., min_length=10, max_length=20)
    cnic: str | None = Field(None, max_length=20)


class AccountIdResponse(BaseModel):
    account_id: str


class StatusResponse(BaseModel):
    status: str = "ok"
