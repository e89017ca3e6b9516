"""Repository for the Product aggregate."""

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.repository(part_of=Product)
class ProductRepository:
    def for_seller(self, seller_id) -> list[Product]:
        """The seller's products, newest first."""
        products = self._dao.query.filter(seller_id=str(seller_id)).all().items
        return sorted(products, key=lambda p: p.created_at, reverse=True)

    def with_sku(self, sku) -> Product | None:
        products = self._dao.query.filter(sku=sku).all().items
        return products[0] if products else None
