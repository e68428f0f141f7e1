"""Pydantic request schemas for the store settings API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class UpdateTaxRateRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"rate": 0.1, "description": "Tax rate (10%)"}]}}

    rate: float = Field(..., ge=0, le=1)
    description: str | None = Field(None, max_length=255)


class UpdateShippingRateRequest(BaseModel):
    rate: float = Field(..., ge=0)
    free_shipping_threshold: float = Field(..., ge=0)
    description: str | None = Field(None, max_length=255)


class UpdateCurrencyRequest(BaseModel):
    code: str = Field(..., min_length=3, max_length=3)
    symbol: str = Field(..., min_length=1, max_length=10)
    name: str = Field(..., min_length=1, max_length=100)
