"""Inventory ledger: stock operations addressed by product id.

The ledger loads the Product, applies the change and stores it through the
repository of the active unit of work, so callers (checkout, seller
fulfillment, the stock commands) compose several ledger operations into one
atomic change.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.errors import NotFound
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class InventoryLedger:
    def __init__(self):
        self.repository = current_domain.repository_for(Product)

    def product(self, product_id) -> Product:
        try:
            return self.repository.get(str(product_id))
        except ObjectNotFoundError as exc:
            raise NotFound(f"Product {product_id} not found") from exc

    def _apply(self, product_id, operation, quantity, **kwargs) -> Product:
        product = self.product(product_id)
        getattr(product, operation)(quantity, **kwargs)
        self.repository.add(product)
        logger.info(
            "Stock ledger updated",
            operation=operation,
            product_id=str(product_id),
            quantity=quantity,
            stock=product.stock,
            reserved=product.reserved,
        )
        return product

    def reserve(self, product_id, quantity) -> Product:
        return self._apply(product_id, "reserve", quantity)

    def release(self, product_id, quantity) -> Product:
        return self._apply(product_id, "release", quantity)

    def decrement(self, product_id, quantity, from_reservation=False) -> Product:
        return self._apply(product_id, "decrement", quantity, from_reservation=from_reservation)

    def increment(self, product_id, quantity) -> Product:
        return self._apply(product_id, "increment", quantity)
