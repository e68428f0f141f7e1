"""ShoppingCart aggregate with CartItem entity.

A cart belongs to one browser session and is identified by that session's
id. Each line keeps a snapshot of the product it was added from (name,
unit price, stock on hand, primary image). ``total`` and ``item_count`` are
rebuilt from the lines after every mutation and never adjusted in place.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from miniworld.domain import miniworld
from miniworld.ordering.cart.errors import InsufficientStock, OutOfStock


@miniworld.entity(part_of="ShoppingCart")
class CartItem:
    product_id: Identifier(required=True)
    product_name: String(required=True, max_length=255)
    unit_price: Float(required=True, min_value=0.0)
    stock_quantity: Integer(required=True, min_value=0)
    image: String(max_length=1000)
    quantity: Integer(required=True, min_value=1)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity

    def to_dict(self) -> dict:
        return {
            "product_id": str(self.product_id),
            "product_name": self.product_name,
            "unit_price": self.unit_price,
            "stock_quantity": self.stock_quantity,
            "image": self.image,
            "quantity": self.quantity,
            "line_total": self.line_total,
        }


@miniworld.aggregate
class ShoppingCart:
    session_id: Identifier(identifier=True)
    items: HasMany(CartItem)
    total: Float(default=0.0)
    item_count: Integer(default=0)
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @invariant.post
    def line_quantities_must_fit_stock(self):
        for item in self.items:
            if item.quantity < 1:
                raise ValidationError({"quantity": ["Quantity must be at least 1"]})
            if item.quantity > item.stock_quantity:
                raise ValidationError(
                    {"quantity": [f"Only {item.stock_quantity} item(s) available in stock"]}
                )

    def line_for(self, product_id) -> CartItem | None:
        return next((item for item in self.items if str(item.product_id) == str(product_id)), None)

    def add_item(self, product, quantity: int):
        """Add ``quantity`` of ``product``, merging with an existing line."""
        from miniworld.ordering.cart.events import CartItemAdded

        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if product.stock_quantity == 0:
            raise OutOfStock(product_id=product.id)

        line = self.line_for(product.id)
        in_cart = line.quantity if line else 0
        if in_cart + quantity > product.stock_quantity:
            raise InsufficientStock(product.stock_quantity - in_cart, product_id=product.id)

        with atomic_change(self):
            if line:
                line.stock_quantity = product.stock_quantity
                line.unit_price = product.price
                line.quantity = in_cart + quantity
            else:
                line = CartItem(
                    product_id=product.id,
                    product_name=product.name,
                    unit_price=product.price,
                    stock_quantity=product.stock_quantity,
                    image=product.primary_image,
                    quantity=quantity,
                )
                self.add_items(line)
            self._recalculate()

        self.raise_(
            CartItemAdded(
                session_id=self.session_id,
                product_id=product.id,
                quantity=quantity,
                line_quantity=line.quantity,
                cart_total=self.total,
            )
        )

    def update_quantity(
        self, product_id, quantity: int, available: int | None = None, price: float | None = None
    ):
        """Replace a line's quantity; zero or less removes the line.

        ``available`` and ``price`` are the live stock and price of the
        product; the line's snapshot is kept for whichever is not given.
        """
        from miniworld.ordering.cart.events import CartItemQuantityChanged

        line = self.line_for(product_id)
        if line is None:
            raise ObjectNotFoundError({"product_id": ["Item not found in cart"]})

        if quantity <= 0:
            self.remove_item(product_id)
            return

        stock = line.stock_quantity if available is None else available
        if quantity > stock:
            raise InsufficientStock(stock, product_id=product_id)

        previous = line.quantity
        with atomic_change(self):
            line.stock_quantity = stock
            line.quantity = quantity
            if price is not None:
                line.unit_price = price
            self._recalculate()

        self.raise_(
            CartItemQuantityChanged(
                session_id=self.session_id,
                product_id=line.product_id,
                previous_quantity=previous,
                new_quantity=quantity,
                cart_total=self.total,
            )
        )

    def remove_item(self, product_id):
        from miniworld.ordering.cart.events import CartItemRemoved

        line = self.line_for(product_id)
        if line is None:
            return

        with atomic_change(self):
            self.remove_items(line)
            self._recalculate()

        self.raise_(CartItemRemoved(session_id=self.session_id, product_id=line.product_id, cart_total=self.total))

    def clear(self, reason: str | None = None):
        from miniworld.ordering.cart.events import CartCleared

        with atomic_change(self):
            for line in list(self.items):
                self.remove_items(line)
            self._recalculate()

        self.raise_(CartCleared(session_id=self.session_id, reason=reason))

    def _recalculate(self):
        self.total = sum(item.unit_price * item.quantity for item in self.items)
        self.item_count = sum(item.quantity for item in self.items)
        self.updated_at = datetime.now(UTC)

    def to_dict(self) -> dict:
        return {
            "session_id": str(self.session_id),
            "items": [item.to_dict() for item in self.items],
            "total": self.total,
            "item_count": self.item_count,
        }
