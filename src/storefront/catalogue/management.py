"""Seller product management: listing products and overwriting stock."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.ledger import InventoryLedger
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.errors import NotFound, ValidationFailed
from storefront.seller.access import require_approved_seller
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class ListProduct:
    """An approved seller puts a new product on sale."""

    seller_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    category = String(max_length=100)
    sku = String(max_length=50)
    price = Float(required=True)
    stock = Integer(required=True)


@storefront.command(part_of="Product")
class SetStockLevel:
    """Overwrite the on-hand count of a product the seller owns."""

    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)
    stock = Integer(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductsHandler:
    @handle(ListProduct)
    def list_product(self, command):
        require_approved_seller(command.seller_id)

        repo = current_domain.repository_for(Product)
        sku = (command.sku or "").strip() or None
        if sku and repo.with_sku(sku) is not None:
            raise ValidationFailed("SKU already exists")

        product = Product.create(
            seller_id=command.seller_id,
            name=command.name,
            price=command.price,
            stock=command.stock,
            description=command.description,
            category=command.category,
            sku=sku,
        )
        repo.add(product)
        logger.info("Product listed", product_id=str(product.id), seller_id=str(command.seller_id))
        return str(product.id)

    @handle(SetStockLevel)
    def set_stock_level(self, command):
        require_approved_seller(command.seller_id)

        ledger = InventoryLedger()
        product = ledger.product(command.product_id)
        if str(product.seller_id) != str(command.seller_id):
            raise NotFound("Product not found or not yours")

        product.set_stock(command.stock)
        ledger.repository.add(product)
        logger.info(
            "Stock level overwritten",
            product_id=str(product.id),
            seller_id=str(command.seller_id),
            stock=product.stock,
        )
        return str(product.id)


def products_for_seller(seller_id):
    """The approved seller's products, newest first."""
    require_approved_seller(seller_id)
    return current_domain.repository_for(Product).for_seller(seller_id)
