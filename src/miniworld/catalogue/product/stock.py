"""Stock status derivation."""

from enum import Enum

DEFAULT_LOW_STOCK_THRESHOLD = 10
DEFAULT_MAX_STOCK_QUANTITY = 100


class StockStatus(Enum):
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


def derive_stock_status(quantity: int, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> StockStatus:
    if quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if quantity <= threshold:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK
