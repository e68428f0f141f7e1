"""Application tests for back-office product commands and catalogue queries."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from miniworld.catalogue import queries
from miniworld.catalogue.product.management import (
    AddProduct,
    AdjustStockLevel,
    RemoveProduct,
    SetStockLevel,
    UpdateProductDetails,
)
from miniworld.catalogue.product.product import Product
from miniworld.catalogue.seed import SeedCatalogue, load_sample_products


def _add_product(**overrides):
    defaults = {
        "name": "HoloBlocks Building Set",
        "price": 22200,
        "category": "1-3-years",
        "features": json.dumps(["Magnetic connections"]),
        "images": json.dumps(["https://example.com/blocks.jpg"]),
        "stock_quantity": 18,
        "low_stock_threshold": 10,
    }
    defaults.update(overrides)
    return current_domain.process(AddProduct(**defaults), asynchronous=False)


class TestAddProduct:
    def test_add_product_persists(self):
        product_id = _add_product()
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "HoloBlocks Building Set"
        assert product.feature_list == ["Magnetic connections"]
        assert product.stock_status == "in_stock"


class TestUpdateProduct:
    def test_update_details(self):
        product_id = _add_product()
        current_domain.process(
            UpdateProductDetails(product_id=product_id, price=19999, is_featured=True),
            asynchronous=False,
        )
        product = current_domain.repository_for(Product).get(product_id)
        assert product.price == 19999
        assert product.is_featured is True
        assert product.name == "HoloBlocks Building Set"

    def test_update_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateProductDetails(product_id="missing", price=10), asynchronous=False)


class TestRemoveProduct:
    def test_remove_deletes_record(self):
        product_id = _add_product()
        current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(product_id)


class TestStockCommands:
    def test_set_stock(self):
        product_id = _add_product()
        current_domain.process(SetStockLevel(product_id=product_id, quantity=4), asynchronous=False)
        product = current_domain.repository_for(Product).get(product_id)
        assert product.stock_quantity == 4
        assert product.stock_status == "low_stock"

    def test_set_negative_stock_rejected(self):
        product_id = _add_product()
        with pytest.raises(ValidationError):
            current_domain.process(SetStockLevel(product_id=product_id, quantity=-2), asynchronous=False)

    def test_adjust_stock(self):
        product_id = _add_product(stock_quantity=5)
        current_domain.process(AdjustStockLevel(product_id=product_id, delta=20), asynchronous=False)
        product = current_domain.repository_for(Product).get(product_id)
        assert product.stock_quantity == 25


class TestSeedCatalogue:
    def test_seed_loads_sample_products(self):
        created = current_domain.process(SeedCatalogue(requested_by="ops@miniworld.pk"), asynchronous=False)
        assert created == len(load_sample_products()) == 9
        assert queries.stock_counts()["total"] == 9

    def test_seed_refuses_non_empty_catalogue(self):
        _add_product()
        with pytest.raises(ValidationError):
            current_domain.process(SeedCatalogue(requested_by="ops@miniworld.pk"), asynchronous=False)


class TestCatalogueQueries:
    @pytest.fixture(autouse=True)
    def _seed(self):
        current_domain.process(SeedCatalogue(requested_by="tests"), asynchronous=False)

    def test_list_products(self):
        assert len(queries.list_products()) == 9

    def test_products_by_category(self):
        products = queries.get_products_by_category("3-5-years")
        assert {p.name for p in products} == {"AR Learning Tablet", "CyberRide Balance Bike"}

    def test_products_by_unknown_category(self):
        with pytest.raises(ObjectNotFoundError):
            queries.get_products_by_category("teens")

    def test_search_is_case_insensitive(self):
        products = queries.filter_products(search="holo")
        assert {p.name for p in products} == {"HoloMobile Projector", "HoloBlocks Building Set"}

    def test_all_disables_filters(self):
        assert len(queries.filter_products(category="all", stock_status="all")) == 9

    def test_filter_by_stock_status(self):
        products = queries.filter_products(stock_status="out_of_stock")
        assert [p.name for p in products] == ["HoloMobile Projector"]

    def test_stock_counts(self):
        counts = queries.stock_counts()
        assert counts == {"in_stock": 5, "low_stock": 3, "out_of_stock": 1, "total": 9}

    def test_low_stock_alerts(self):
        assert queries.low_stock_alerts() == 4

    def test_get_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            queries.get_product("missing")
