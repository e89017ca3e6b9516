from storefront.cart.cart import CartStatus, ShoppingCart
from storefront.domain import storefront


@storefront.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def active_cart_for(self, buyer_id):
        """The buyer's Active cart, or None."""
        carts = (
            self._dao.query.filter(buyer_id=str(buyer_id), status=CartStatus.ACTIVE.value).all().items
        )
        return carts[0] if carts else None
