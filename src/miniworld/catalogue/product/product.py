"""Product aggregate root.

Stock status is never set on its own: every path that touches the quantity
or the low-stock threshold recomputes it through ``derive_stock_status``,
and an invariant rejects any record where the two disagree.
"""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from miniworld.catalogue.category.categories import AgeCategory
from miniworld.catalogue.product.stock import (
    DEFAULT_LOW_STOCK_THRESHOLD,
    DEFAULT_MAX_STOCK_QUANTITY,
    StockStatus,
    derive_stock_status,
)
from miniworld.domain import miniworld


def _dump_list(value) -> str:
    if value is None:
        return "[]"
    if isinstance(value, str):
        return value
    return json.dumps(list(value))


def _load_list(value) -> list:
    if not value:
        return []
    try:
        loaded = json.loads(value)
    except (json.JSONDecodeError, TypeError):
        return []
    return loaded if isinstance(loaded, list) else []


@miniworld.aggregate
class Product:
    """A baby product listed in the storefront."""

    name: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.01)
    original_price: Float(min_value=0.0)
    category: String(required=True, choices=AgeCategory)
    description: Text()
    features: Text(default="[]")
    images: Text(default="[]")
    thumbnail_index: Integer(default=0, min_value=0)
    rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    reviews: Integer(default=0, min_value=0)
    is_new: Boolean(default=False)
    is_featured: Boolean(default=False)
    is_active: Boolean(default=True)
    stock_quantity: Integer(default=0, min_value=0)
    low_stock_threshold: Integer(default=DEFAULT_LOW_STOCK_THRESHOLD, min_value=0)
    max_stock_quantity: Integer(default=DEFAULT_MAX_STOCK_QUANTITY, min_value=0)
    stock_status: String(choices=StockStatus, default=StockStatus.OUT_OF_STOCK.value)
    in_stock: Boolean(default=False)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def stock_status_must_match_quantity(self):
        expected = derive_stock_status(self.stock_quantity or 0, self.low_stock_threshold or 0)
        if self.stock_status != expected.value:
            raise ValidationError(
                {"stock_status": [f"Stock status must be '{expected.value}' for quantity {self.stock_quantity}"]}
            )
        if self.in_stock != (self.stock_quantity > 0):
            raise ValidationError({"in_stock": ["In-stock flag must reflect the stock quantity"]})

    @invariant.post
    def thumbnail_must_point_at_an_image(self):
        image_count = len(self.image_list)
        if image_count and self.thumbnail_index >= image_count:
            raise ValidationError({"thumbnail_index": ["Thumbnail index is outside the image list"]})

    @property
    def feature_list(self) -> list[str]:
        return _load_list(self.features)

    @property
    def image_list(self) -> list[str]:
        return _load_list(self.images)

    @property
    def primary_image(self) -> str | None:
        images = self.image_list
        if not images:
            return None
        index = self.thumbnail_index if self.thumbnail_index < len(images) else 0
        return images[index]

    @classmethod
    def create(
        cls,
        name,
        price,
        category,
        description=None,
        features=None,
        images=None,
        original_price=None,
        thumbnail_index=0,
        rating=0.0,
        reviews=0,
        is_new=False,
        is_featured=False,
        stock_quantity=0,
        low_stock_threshold=DEFAULT_LOW_STOCK_THRESHOLD,
        max_stock_quantity=DEFAULT_MAX_STOCK_QUANTITY,
    ):
        from miniworld.catalogue.product.events import ProductAdded

        now = datetime.now(UTC)
        status = derive_stock_status(stock_quantity, low_stock_threshold)
        product = cls(
            name=name,
            price=price,
            original_price=original_price,
            category=category,
            description=description,
            features=_dump_list(features),
            images=_dump_list(images),
            thumbnail_index=thumbnail_index,
            rating=rating,
            reviews=reviews,
            is_new=is_new,
            is_featured=is_featured,
            stock_quantity=stock_quantity,
            low_stock_threshold=low_stock_threshold,
            max_stock_quantity=max_stock_quantity,
            stock_status=status.value,
            in_stock=stock_quantity > 0,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=product.id,
                name=name,
                category=category,
                price=price,
                stock_quantity=stock_quantity,
                added_at=now,
            )
        )
        return product

    def update_details(self, **changes):
        """Apply the given field changes. ``None`` values are ignored."""
        from miniworld.catalogue.product.events import ProductDetailsUpdated

        list_fields = {"features", "images"}
        editable = {
            "name",
            "price",
            "original_price",
            "category",
            "description",
            "features",
            "images",
            "thumbnail_index",
            "is_new",
            "is_featured",
            "is_active",
            "low_stock_threshold",
            "max_stock_quantity",
        }
        unknown = set(changes) - editable
        if unknown:
            raise ValidationError({"product": [f"Cannot update fields: {', '.join(sorted(unknown))}"]})

        with atomic_change(self):
            for field_name, value in changes.items():
                if value is None:
                    continue
                setattr(self, field_name, _dump_list(value) if field_name in list_fields else value)
            self._refresh_stock_status()

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                category=self.category,
                price=self.price,
            )
        )

    def set_stock(self, quantity: int, reason: str | None = None):
        if quantity is None or quantity < 0:
            raise ValidationError({"stock_quantity": ["Stock quantity cannot be negative"]})
        self._change_stock(quantity, reason)

    def adjust_stock(self, delta: int, reason: str | None = None):
        """Move stock by ``delta``; the result never drops below zero."""
        self._change_stock(max(0, self.stock_quantity + delta), reason)

    def _change_stock(self, quantity, reason):
        from miniworld.catalogue.product.events import LowStockDetected, StockLevelChanged

        previous = self.stock_quantity
        with atomic_change(self):
            self.stock_quantity = quantity
            self._refresh_stock_status()
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockLevelChanged(
                product_id=self.id,
                previous_quantity=previous,
                new_quantity=quantity,
                stock_status=self.stock_status,
                reason=reason,
            )
        )
        if self.stock_status == StockStatus.LOW_STOCK.value and previous > self.low_stock_threshold:
            self.raise_(
                LowStockDetected(
                    product_id=self.id,
                    name=self.name,
                    current_quantity=quantity,
                    threshold=self.low_stock_threshold,
                )
            )

    def _refresh_stock_status(self):
        self.stock_status = derive_stock_status(self.stock_quantity, self.low_stock_threshold).value
        self.in_stock = self.stock_quantity > 0

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "price": self.price,
            "original_price": self.original_price,
            "category": self.category,
            "description": self.description,
            "features": self.feature_list,
            "images": self.image_list,
            "thumbnail_index": self.thumbnail_index,
            "rating": self.rating,
            "reviews": self.reviews,
            "is_new": self.is_new,
            "is_featured": self.is_featured,
            "is_active": self.is_active,
            "stock_quantity": self.stock_quantity,
            "low_stock_threshold": self.low_stock_threshold,
            "max_stock_quantity": self.max_stock_quantity,
            "stock_status": self.stock_status,
            "in_stock": self.in_stock,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
