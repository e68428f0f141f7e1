"""Integration tests for Catalogue API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean import current_domain
from protean.integrations.fastapi import register_exception_handlers

from miniworld.catalogue.api.routes import admin_catalogue_router, category_router, product_router
from miniworld.catalogue.product.product import Product
from miniworld.catalogue.seed import SeedCatalogue
from miniworld.identity.admin.management import CreateSuperAdmin

ADMIN_HEADERS = {"Authorization": "Bearer admin-token"}


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(category_router)
    app.include_router(product_router)
    app.include_router(admin_catalogue_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def super_admin():
    return current_domain.process(
        CreateSuperAdmin(email="owner@miniworld.pk", name="Store Owner"),
        asynchronous=False,
    )


@pytest.fixture()
def seeded():
    current_domain.process(SeedCatalogue(requested_by="tests"), asynchronous=False)


def _product_payload(**overrides):
    payload = {
        "name": "NeoFeed Smart Bottle",
        "price": 24975,
        "category": "0-6-months",
        "features": ["Temperature monitoring and alerts"],
        "images": ["https://images.example.com/bottle.jpg"],
        "stock_quantity": 45,
    }
    payload.update(overrides)
    return payload


class TestCategoryEndpoints:
    def test_list_categories(self, client):
        response = client.get("/categories")
        assert response.status_code == 200
        assert len(response.json()) == 4

    def test_category_detail(self, client):
        response = client.get("/categories/0-6-months")
        assert response.status_code == 200
        assert response.json()["display_name"] == "Newborn Essentials"

    def test_unknown_category(self, client):
        response = client.get("/categories/teens")
        assert response.status_code == 404

    def test_category_products(self, client, seeded):
        response = client.get("/categories/6-12-months/products")
        assert response.status_code == 200
        assert len(response.json()) == 2


class TestProductEndpoints:
    def test_list_products(self, client, seeded):
        response = client.get("/products")
        assert response.status_code == 200
        assert len(response.json()) == 9

    def test_filter_products(self, client, seeded):
        response = client.get("/products", params={"search": "bike", "stock_status": "all"})
        assert [p["name"] for p in response.json()] == ["CyberRide Balance Bike"]

    def test_product_detail_includes_image_variants(self, client, seeded):
        product_id = client.get("/products").json()[0]["id"]
        response = client.get(f"/products/{product_id}")
        assert response.status_code == 200
        body = response.json()
        assert len(body["image_variants"]) == len(body["images"])

    def test_unknown_product(self, client):
        response = client.get("/products/missing")
        assert response.status_code == 404


class TestAdminAccess:
    def test_missing_token(self, client):
        response = client.post("/admin/products", json=_product_payload())
        assert response.status_code == 401

    def test_unknown_token(self, client):
        response = client.get("/admin/inventory", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    def test_token_without_admin_record(self, client):
        response = client.get("/admin/inventory", headers=ADMIN_HEADERS)
        assert response.status_code == 403


class TestAdminProductEndpoints:
    def test_add_product(self, client, super_admin):
        response = client.post("/admin/products", json=_product_payload(), headers=ADMIN_HEADERS)
        assert response.status_code == 201
        product = current_domain.repository_for(Product).get(response.json()["product_id"])
        assert product.stock_status == "in_stock"

    def test_add_product_with_unknown_category(self, client, super_admin):
        response = client.post("/admin/products", json=_product_payload(category="teens"), headers=ADMIN_HEADERS)
        assert response.status_code == 400

    def test_add_product_with_formatted_prices(self, client, super_admin):
        payload = _product_payload(price="PKR 24,975", original_price="PKR 30,525")
        response = client.post("/admin/products", json=payload, headers=ADMIN_HEADERS)
        assert response.status_code == 201
        product = current_domain.repository_for(Product).get(response.json()["product_id"])
        assert product.price == 24975
        assert product.original_price == 30525

    def test_rejects_price_text_without_amount(self, client, super_admin):
        response = client.post("/admin/products", json=_product_payload(price="PKR free"), headers=ADMIN_HEADERS)
        assert response.status_code == 422

    def test_update_product(self, client, super_admin):
        product_id = client.post("/admin/products", json=_product_payload(), headers=ADMIN_HEADERS).json()[
            "product_id"
        ]
        response = client.put(
            f"/admin/products/{product_id}",
            json={"name": "NeoFeed Bottle v2", "features": ["Wireless charging"]},
            headers=ADMIN_HEADERS,
        )
        assert response.status_code == 200
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "NeoFeed Bottle v2"
        assert product.feature_list == ["Wireless charging"]

    def test_update_price_from_formatted_text(self, client, super_admin):
        product_id = client.post("/admin/products", json=_product_payload(), headers=ADMIN_HEADERS).json()[
            "product_id"
        ]
        response = client.put(f"/admin/products/{product_id}", json={"price": "pkr 19,999"}, headers=ADMIN_HEADERS)
        assert response.status_code == 200
        assert current_domain.repository_for(Product).get(product_id).price == 19999

    def test_reserve_image_path(self, client, super_admin):
        response = client.post("/admin/product-images", json={"filename": "bottle.PNG"}, headers=ADMIN_HEADERS)
        assert response.status_code == 201
        body = response.json()
        assert body["bucket"] == "product-images"
        assert body["path"].startswith("products/")
        assert body["path"].endswith(".PNG")

    def test_image_folder_must_be_a_plain_name(self, client, super_admin):
        response = client.post(
            "/admin/product-images", json={"filename": "a.jpg", "folder": "../secrets"}, headers=ADMIN_HEADERS
        )
        assert response.status_code == 422

    def test_set_and_adjust_stock(self, client, super_admin):
        product_id = client.post("/admin/products", json=_product_payload(), headers=ADMIN_HEADERS).json()[
            "product_id"
        ]
        client.put(f"/admin/products/{product_id}/stock", json={"quantity": 5}, headers=ADMIN_HEADERS)
        response = client.post(
            f"/admin/products/{product_id}/stock/adjust", json={"delta": -2}, headers=ADMIN_HEADERS
        )
        assert response.status_code == 200
        product = current_domain.repository_for(Product).get(product_id)
        assert product.stock_quantity == 3
        assert product.stock_status == "low_stock"

    def test_remove_product(self, client, super_admin):
        product_id = client.post("/admin/products", json=_product_payload(), headers=ADMIN_HEADERS).json()[
            "product_id"
        ]
        response = client.delete(f"/admin/products/{product_id}", headers=ADMIN_HEADERS)
        assert response.status_code == 200
        assert client.get(f"/products/{product_id}").status_code == 404

    def test_inventory_summary(self, client, super_admin, seeded):
        response = client.get("/admin/inventory", headers=ADMIN_HEADERS)
        assert response.status_code == 200
        summary = response.json()
        assert summary["total_products"] == 9
        assert summary["alerts"] == 4

    def test_seed_endpoint(self, client, super_admin):
        response = client.post("/admin/catalogue/seed", headers=ADMIN_HEADERS)
        assert response.status_code == 201
        assert response.json()["created"] == 9
        assert client.post("/admin/catalogue/seed", headers=ADMIN_HEADERS).status_code == 400
