"""Back-office product management: commands and handler."""

from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from miniworld.catalogue.product.product import Product
from miniworld.catalogue.product.stock import DEFAULT_LOW_STOCK_THRESHOLD, DEFAULT_MAX_STOCK_QUANTITY
from miniworld.domain import miniworld
from miniworld.utils.logging import get_logger

logger = get_logger(__name__)


@miniworld.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    price: Float(required=True)
    category: String(required=True, max_length=20)
    original_price: Float()
    description: Text()
    features: Text()
    images: Text()
    thumbnail_index: Integer(default=0)
    rating: Float(default=0.0)
    reviews: Integer(default=0)
    is_new: Boolean(default=False)
    is_featured: Boolean(default=False)
    stock_quantity: Integer(default=0)
    low_stock_threshold: Integer(default=DEFAULT_LOW_STOCK_THRESHOLD)
    max_stock_quantity: Integer(default=DEFAULT_MAX_STOCK_QUANTITY)


@miniworld.command(part_of="Product")
class UpdateProductDetails:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    price: Float()
    category: String(max_length=20)
    original_price: Float()
    description: Text()
    features: Text()
    images: Text()
    thumbnail_index: Integer()
    is_new: Boolean()
    is_featured: Boolean()
    is_active: Boolean()
    low_stock_threshold: Integer()
    max_stock_quantity: Integer()


@miniworld.command(part_of="Product")
class RemoveProduct:
    product_id: Identifier(required=True)


@miniworld.command(part_of="Product")
class SetStockLevel:
    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    reason: String(max_length=255)


@miniworld.command(part_of="Product")
class AdjustStockLevel:
    product_id: Identifier(required=True)
    delta: Integer(required=True)
    reason: String(max_length=255)


@miniworld.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            category=command.category,
            original_price=command.original_price,
            description=command.description,
            features=command.features,
            images=command.images,
            thumbnail_index=command.thumbnail_index or 0,
            rating=command.rating or 0.0,
            reviews=command.reviews or 0,
            is_new=bool(command.is_new),
            is_featured=bool(command.is_featured),
            stock_quantity=command.stock_quantity or 0,
            low_stock_threshold=command.low_stock_threshold,
            max_stock_quantity=command.max_stock_quantity,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_added", product_id=str(product.id), name=product.name)
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            price=command.price,
            category=command.category,
            original_price=command.original_price,
            description=command.description,
            features=command.features,
            images=command.images,
            thumbnail_index=command.thumbnail_index,
            is_new=command.is_new,
            is_featured=command.is_featured,
            is_active=command.is_active,
            low_stock_threshold=command.low_stock_threshold,
            max_stock_quantity=command.max_stock_quantity,
        )
        repo.add(product)

    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)
        logger.info("product_removed", product_id=str(command.product_id))

    @handle(SetStockLevel)
    def set_stock_level(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.set_stock(command.quantity, reason=command.reason)
        repo.add(product)

    @handle(AdjustStockLevel)
    def adjust_stock_level(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.adjust_stock(command.delta, reason=command.reason)
        repo.add(product)
