"""Domain events for Order and SellerOrder."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    __version__ = 1

    order_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    item_count = Integer(required=True)
    final_amount = Float(required=True)
    payment_method = String(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """The status derived from the seller sub-orders moved."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@storefront.event(part_of="SellerOrder")
class SellerOrderAccepted:
    __version__ = 1

    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    confirmed_at = DateTime(required=True)


@storefront.event(part_of="SellerOrder")
class SellerOrderRejected:
    __version__ = 1

    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    previous_status = String(required=True)
    cancelled_at = DateTime(required=True)


@storefront.event(part_of="SellerOrder")
class SellerOrderDispatched:
    __version__ = 1

    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    shipped_at = DateTime(required=True)
