"""Read-side helpers for the catalogue.

The catalogue is small, so every query loads the full product list
(newest first) and filters it in memory.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from miniworld.catalogue.category.categories import get_category
from miniworld.catalogue.product.product import Product
from miniworld.catalogue.product.stock import StockStatus

ALL = "all"


def list_products() -> list[Product]:
    return current_domain.repository_for(Product)._dao.query.order_by("-created_at").all().items


def get_product(product_id: str) -> Product:
    for product in list_products():
        if str(product.id) == str(product_id):
            return product
    raise ObjectNotFoundError(f"Product {product_id} not found")


def get_products_by_category(category_id: str) -> list[Product]:
    get_category(category_id)
    return [product for product in list_products() if product.category == category_id]


def filter_products(
    search: str | None = None,
    category: str | None = None,
    stock_status: str | None = None,
) -> list[Product]:
    """Case-insensitive name search combined with category and stock filters.

    ``None`` or ``"all"`` disables a filter.
    """
    needle = (search or "").strip().lower()
    products = list_products()

    if needle:
        products = [p for p in products if needle in p.name.lower()]
    if category and category != ALL:
        products = [p for p in products if p.category == category]
    if stock_status and stock_status != ALL:
        products = [p for p in products if p.stock_status == stock_status]
    return products


def stock_counts() -> dict[str, int]:
    counts = {status.value: 0 for status in StockStatus}
    products = list_products()
    for product in products:
        counts[product.stock_status] += 1
    counts["total"] = len(products)
    return counts


def low_stock_alerts() -> int:
    """Number of products that need restocking (low or out of stock)."""
    counts = stock_counts()
    return counts[StockStatus.LOW_STOCK.value] + counts[StockStatus.OUT_OF_STOCK.value]


def inventory_summary() -> dict:
    products = list_products()
    counts = stock_counts()
    return {
        "total_products": counts["total"],
        "in_stock": counts[StockStatus.IN_STOCK.value],
        "low_stock": counts[StockStatus.LOW_STOCK.value],
        "out_of_stock": counts[StockStatus.OUT_OF_STOCK.value],
        "alerts": counts[StockStatus.LOW_STOCK.value] + counts[StockStatus.OUT_OF_STOCK.value],
        "total_units": sum(p.stock_quantity for p in products),
        "stock_value": sum(p.stock_quantity * p.price for p in products),
    }
