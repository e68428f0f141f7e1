"""FastAPI endpoints for the storefront catalogue and its back office."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from miniworld.catalogue import queries
from miniworld.catalogue.api.schemas import (
    AddProductRequest,
    AdjustStockRequest,
    ImageUploadRequest,
    ImageUploadResponse,
    ProductIdResponse,
    SeedResponse,
    SetStockRequest,
    StatusResponse,
    UpdateProductRequest,
)
from miniworld.catalogue.category.categories import CATEGORIES, get_category
from miniworld.catalogue.product.images import IMAGE_BUCKET, image_variants, storage_path
from miniworld.catalogue.product.management import (
    AddProduct,
    AdjustStockLevel,
    RemoveProduct,
    SetStockLevel,
    UpdateProductDetails,
)
from miniworld.catalogue.seed import SeedCatalogue
from miniworld.identity.auth.dependencies import require_admin
from miniworld.identity.auth.sessions import AdminSession

category_router = APIRouter(prefix="/categories", tags=["categories"])
product_router = APIRouter(prefix="/products", tags=["products"])
admin_catalogue_router = APIRouter(prefix="/admin", tags=["admin-catalogue"], dependencies=[Depends(require_admin)])


def _product_view(product) -> dict:
    data = product.to_dict()
    data["image_variants"] = [image_variants(url) for url in data["images"]]
    return data


# --- Category endpoints ---


@category_router.get("")
async def list_categories() -> list[dict]:
    return [category.to_dict() for category in CATEGORIES]


@category_router.get("/{category_id}")
async def category_detail(category_id: str) -> dict:
    return get_category(category_id).to_dict()


@category_router.get("/{category_id}/products")
async def category_products(category_id: str) -> list[dict]:
    return [_product_view(p) for p in queries.get_products_by_category(category_id)]


# --- Product endpoints ---


@product_router.get("")
async def list_products(
    search: str | None = None,
    category: str | None = None,
    stock_status: str | None = None,
) -> list[dict]:
    products = queries.filter_products(search=search, category=category, stock_status=stock_status)
    return [_product_view(p) for p in products]


@product_router.get("/{product_id}")
async def product_detail(product_id: str) -> dict:
    return _product_view(queries.get_product(product_id))


# --- Back-office endpoints ---


@admin_catalogue_router.get("/products")
async def admin_list_products(
    search: str | None = None,
    category: str | None = None,
    stock_status: str | None = None,
) -> list[dict]:
    products = queries.filter_products(search=search, category=category, stock_status=stock_status)
    return [p.to_dict() for p in products]


@admin_catalogue_router.post("/products", status_code=201, response_model=ProductIdResponse)
async def add_product(body: AddProductRequest) -> ProductIdResponse:
    command = AddProduct(
        name=body.name,
        price=body.price,
        category=body.category,
        original_price=body.original_price,
        description=body.description,
        features=json.dumps(body.features),
        images=json.dumps(body.images),
        thumbnail_index=body.thumbnail_index,
        rating=body.rating,
        reviews=body.reviews,
        is_new=body.is_new,
        is_featured=body.is_featured,
        stock_quantity=body.stock_quantity,
        low_stock_threshold=body.low_stock_threshold,
        max_stock_quantity=body.max_stock_quantity,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@admin_catalogue_router.put("/products/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProductDetails(
        product_id=product_id,
        name=body.name,
        price=body.price,
        category=body.category,
        original_price=body.original_price,
        description=body.description,
        features=json.dumps(body.features) if body.features is not None else None,
        images=json.dumps(body.images) if body.images is not None else None,
        thumbnail_index=body.thumbnail_index,
        is_new=body.is_new,
        is_featured=body.is_featured,
        is_active=body.is_active,
        low_stock_threshold=body.low_stock_threshold,
        max_stock_quantity=body.max_stock_quantity,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_catalogue_router.delete("/products/{product_id}", response_model=StatusResponse)
async def remove_product(product_id: str) -> StatusResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@admin_catalogue_router.put("/products/{product_id}/stock", response_model=StatusResponse)
async def set_stock(product_id: str, body: SetStockRequest) -> StatusResponse:
    command = SetStockLevel(product_id=product_id, quantity=body.quantity, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_catalogue_router.post("/products/{product_id}/stock/adjust", response_model=StatusResponse)
async def adjust_stock(product_id: str, body: AdjustStockRequest) -> StatusResponse:
    command = AdjustStockLevel(product_id=product_id, delta=body.delta, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_catalogue_router.post("/product-images", status_code=201, response_model=ImageUploadResponse)
async def reserve_image_path(body: ImageUploadRequest) -> ImageUploadResponse:
    return ImageUploadResponse(bucket=IMAGE_BUCKET, path=storage_path(body.filename, body.folder))


@admin_catalogue_router.get("/inventory")
async def inventory_summary() -> dict:
    return queries.inventory_summary()


@admin_catalogue_router.post("/catalogue/seed", status_code=201, response_model=SeedResponse)
async def seed_catalogue(admin: AdminSession = Depends(require_admin)) -> SeedResponse:
    created = current_domain.process(SeedCatalogue(requested_by=admin.email), asynchronous=False)
    return SeedResponse(created=created)
