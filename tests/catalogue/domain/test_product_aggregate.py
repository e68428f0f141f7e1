"""Tests for the Product aggregate: creation, details and stock."""

import pytest
from protean.exceptions import ValidationError

from miniworld.catalogue.product.events import LowStockDetected, ProductAdded, StockLevelChanged
from miniworld.catalogue.product.product import Product
from miniworld.catalogue.product.stock import StockStatus


def _make_product(**overrides):
    defaults = {
        "name": "NeoFeed Smart Bottle",
        "price": 24975,
        "category": "0-6-months",
        "images": ["https://example.com/a.jpg", "https://example.com/b.jpg"],
        "features": ["BPA-free premium materials"],
        "stock_quantity": 45,
        "low_stock_threshold": 10,
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_create_derives_stock_status(self):
        product = _make_product()
        assert product.stock_status == StockStatus.IN_STOCK.value
        assert product.in_stock is True

    def test_create_low_stock(self):
        product = _make_product(stock_quantity=8)
        assert product.stock_status == StockStatus.LOW_STOCK.value

    def test_create_out_of_stock(self):
        product = _make_product(stock_quantity=0)
        assert product.stock_status == StockStatus.OUT_OF_STOCK.value
        assert product.in_stock is False

    def test_create_raises_product_added(self):
        product = _make_product()
        events = [e for e in product._events if isinstance(e, ProductAdded)]
        assert len(events) == 1
        assert events[0].name == "NeoFeed Smart Bottle"

    def test_lists_are_round_tripped(self):
        product = _make_product()
        assert product.image_list == ["https://example.com/a.jpg", "https://example.com/b.jpg"]
        assert product.feature_list == ["BPA-free premium materials"]

    def test_primary_image_follows_thumbnail_index(self):
        product = _make_product(thumbnail_index=1)
        assert product.primary_image == "https://example.com/b.jpg"

    def test_primary_image_none_without_images(self):
        product = _make_product(images=[])
        assert product.primary_image is None

    def test_thumbnail_outside_images_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(thumbnail_index=5)

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(category="teenagers")

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            _make_product(price=0)


class TestProductDetails:
    def test_update_details(self):
        product = _make_product()
        product.update_details(name="NeoFeed Bottle v2", price=19999)
        assert product.name == "NeoFeed Bottle v2"
        assert product.price == 19999

    def test_none_values_are_ignored(self):
        product = _make_product()
        product.update_details(name=None, description="Updated")
        assert product.name == "NeoFeed Smart Bottle"
        assert product.description == "Updated"

    def test_threshold_change_recomputes_status(self):
        product = _make_product(stock_quantity=12)
        product.update_details(low_stock_threshold=15)
        assert product.stock_status == StockStatus.LOW_STOCK.value

    def test_unknown_field_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.update_details(stock_status="in_stock")


class TestProductStock:
    def test_set_stock(self):
        product = _make_product()
        product.set_stock(0)
        assert product.stock_quantity == 0
        assert product.stock_status == StockStatus.OUT_OF_STOCK.value
        assert product.in_stock is False

    def test_negative_stock_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError):
            product.set_stock(-1)

    def test_adjust_stock_floors_at_zero(self):
        product = _make_product(stock_quantity=3)
        product.adjust_stock(-10)
        assert product.stock_quantity == 0

    def test_stock_change_raises_event(self):
        product = _make_product()
        product._events.clear()
        product.set_stock(20, reason="recount")
        events = [e for e in product._events if isinstance(e, StockLevelChanged)]
        assert len(events) == 1
        assert events[0].new_quantity == 20

    def test_crossing_into_low_stock_raises_alert(self):
        product = _make_product()
        product._events.clear()
        product.set_stock(5)
        assert any(isinstance(e, LowStockDetected) for e in product._events)

    def test_staying_low_does_not_repeat_alert(self):
        product = _make_product(stock_quantity=5)
        product._events.clear()
        product.set_stock(4)
        assert not any(isinstance(e, LowStockDetected) for e in product._events)
