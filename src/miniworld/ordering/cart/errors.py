"""Cart stock errors.

Both are validation errors, so API callers receive them as 400 responses
carrying the exact message shown to shoppers.
"""

from protean.exceptions import ValidationError


class OutOfStock(ValidationError):
    def __init__(self, product_id=None):
        self.product_id = product_id
        super().__init__({"quantity": ["This product is out of stock"]})


class InsufficientStock(ValidationError):
    def __init__(self, available: int, product_id=None):
        self.available = available
        self.product_id = product_id
        super().__init__({"quantity": [f"Only {available} item(s) available in stock"]})
