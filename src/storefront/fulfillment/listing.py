"""Read side of seller fulfillment: a seller's orders, grouped."""

from dataclasses import dataclass, field
from datetime import datetime

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.buyer.buyer import Buyer
from storefront.order.order import Order, OrderItem
from storefront.order.seller_order import SellerOrder
from storefront.seller.access import require_approved_seller


@dataclass
class BuyerContact:
    name: str
    email: str | None = None
    phone: str | None = None


@dataclass
class SellerOrderView:
    order_id: str
    status: str
    order_status: str
    payment_method: str
    payment_status: str
    total_amount: float
    placed_at: datetime | None
    confirmed_at: datetime | None
    shipped_at: datetime | None
    cancelled_at: datetime | None
    buyer: BuyerContact
    items: list[OrderItem] = field(default_factory=list)


def _buyer_contact(buyer_id):
    try:
        buyer = current_domain.repository_for(Buyer).get(str(buyer_id))
    except ObjectNotFoundError:
        return BuyerContact(name="Customer")
    return BuyerContact(name=buyer.display_name, email=buyer.email, phone=buyer.phone)


def list_orders_for_seller(seller_id):
    """Orders containing the seller's items, newest first.

    Each view carries only the seller's own items, their total, and the
    status of the seller's sub-order.
    """
    require_approved_seller(seller_id)

    order_repo = current_domain.repository_for(Order)
    views = []
    for sub_order in current_domain.repository_for(SellerOrder).for_seller(seller_id):
        order = order_repo.get(str(sub_order.order_id))
        items = order.items_for(seller_id)
        views.append(
            SellerOrderView(
                order_id=str(order.id),
                status=sub_order.status,
                order_status=order.status,
                payment_method=order.payment_method,
                payment_status=order.payment_status,
                total_amount=round(sum(item.total_price for item in items), 2),
                placed_at=order.placed_at,
                confirmed_at=sub_order.confirmed_at,
                shipped_at=sub_order.shipped_at,
                cancelled_at=sub_order.cancelled_at,
                buyer=_buyer_contact(order.buyer_id),
                items=items,
            )
        )
    return views
