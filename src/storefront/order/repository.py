from storefront.domain import storefront
from storefront.order.order import Order
from storefront.order.seller_order import SellerOrder


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_buyer(self, buyer_id):
        """The buyer's orders, newest first."""
        orders = self._dao.query.filter(buyer_id=str(buyer_id)).all().items
        return sorted(orders, key=lambda o: o.placed_at, reverse=True)


@storefront.repository(part_of=SellerOrder)
class SellerOrderRepository:
    def for_order(self, order_id):
        return self._dao.query.filter(order_id=str(order_id)).all().items

    def for_seller(self, seller_id):
        """The seller's sub-orders, newest first."""
        sub_orders = self._dao.query.filter(seller_id=str(seller_id)).all().items
        return sorted(sub_orders, key=lambda s: s.created_at, reverse=True)
