"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

from miniworld.settings.currency import parse_pkr


def _pkr_amount(value):
    """Accept ``PKR 2,500`` style text wherever a price is expected."""
    if isinstance(value, str) and re.search(r"\d", value):
        return parse_pkr(value)
    return value


# --- Product Request Schemas ---


class AddProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "NeoFeed Smart Bottle",
                    "price": 24975,
                    "original_price": 30525,
                    "category": "0-6-months",
                    "description": "Smart feeding bottle with temperature control.",
                    "features": ["Temperature monitoring and alerts", "BPA-free premium materials"],
                    "images": ["https://images.unsplash.com/photo-1566479179817-00b7b49fad44"],
                    "stock_quantity": 45,
                    "low_stock_threshold": 10,
                    "max_stock_quantity": 100,
                    "is_new": True,
                    "is_featured": True,
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., gt=0)
    category: str
    original_price: float | None = Field(None, ge=0)
    description: str | None = None
    features: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    thumbnail_index: int = Field(0, ge=0)
    rating: float = Field(0.0, ge=0, le=5)
    reviews: int = Field(0, ge=0)
    is_new: bool = False
    is_featured: bool = False
    stock_quantity: int = Field(0, ge=0)
    low_stock_threshold: int = Field(10, ge=0)
    max_stock_quantity: int = Field(100, ge=0)

    @field_validator("price", "original_price", mode="before")
    @classmethod
    def parse_prices(cls, value):
        return _pkr_amount(value)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    price: float | None = Field(None, gt=0)
    category: str | None = None
    original_price: float | None = Field(None, ge=0)
    description: str | None = None
    features: list[str] | None = None
    images: list[str] | None = None
    thumbnail_index: int | None = Field(None, ge=0)
    is_new: bool | None = None
    is_featured: bool | None = None
    is_active: bool | None = None
    low_stock_threshold: int | None = Field(None, ge=0)
    max_stock_quantity: int | None = Field(None, ge=0)

    @field_validator("price", "original_price", mode="before")
    @classmethod
    def parse_prices(cls, value):
        return _pkr_amount(value)


class SetStockRequest(BaseModel):
    quantity: int
    reason: str | None = Field(None, max_length=255)


class AdjustStockRequest(BaseModel):
    delta: int
    reason: str | None = Field(None, max_length=255)


class ImageUploadRequest(BaseModel):
    filename: str = Field(..., min_length=1, max_length=255)
    folder: str = Field("products", pattern=r"^[a-z0-9_-]+$")


# --- Response Schemas ---


class ProductIdResponse(BaseModel):
    product_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class SeedResponse(BaseModel):
    created: int


class ImageUploadResponse(BaseModel):
    bucket: str
    path: str
