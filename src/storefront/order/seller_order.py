"""SellerOrder aggregate: one seller's share of an order.

    pending   --accept-->   confirmed --dispatch--> shipped
    pending   --reject-->   cancelled
    confirmed --reject-->   cancelled

Shipped and cancelled are terminal.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront
from storefront.errors import InvalidTransition, ValidationFailed
from storefront.order.events import (
    SellerOrderAccepted,
    SellerOrderDispatched,
    SellerOrderRejected,
)
from storefront.order.order import OrderStatus


class SellerAction(Enum):
    """Seller actions, named by the status they lead to."""

    ACCEPT = "confirmed"
    REJECT = "cancelled"
    DISPATCH = "shipped"

    @classmethod
    def parse(cls, value):
        try:
            return cls(value)
        except ValueError as exc:
            allowed = ", ".join(a.value for a in cls)
            raise ValidationFailed(f"Invalid action '{value}'. Must be one of: {allowed}") from exc


_TRANSITIONS = {
    SellerAction.ACCEPT: {OrderStatus.PENDING},
    SellerAction.REJECT: {OrderStatus.PENDING, OrderStatus.CONFIRMED},
    SellerAction.DISPATCH: {OrderStatus.CONFIRMED},
}

_REFUSALS = {
    SellerAction.ACCEPT: "Cannot accept an order that is already {status}",
    SellerAction.REJECT: "Cannot reject an order that is already {status}",
    SellerAction.DISPATCH: "Only confirmed orders can be dispatched (order is {status})",
}


@storefront.aggregate
class SellerOrder:
    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    confirmed_at = DateTime()
    shipped_at = DateTime()
    cancelled_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def open(cls, order_id, seller_id, buyer_id):
        now = datetime.now(UTC)
        return cls(
            order_id=str(order_id),
            seller_id=str(seller_id),
            buyer_id=str(buyer_id),
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )

    def apply(self, action):
        """Apply a seller action. Returns the status held before it."""
        current = OrderStatus(self.status)
        if current not in _TRANSITIONS[action]:
            raise InvalidTransition(
                _REFUSALS[action].format(status=current.value),
                current_status=current.value,
            )

        now = datetime.now(UTC)
        if action == SellerAction.ACCEPT:
            self.status = OrderStatus.CONFIRMED.value
            self.confirmed_at = now
            self.raise_(SellerOrderAccepted(order_id=str(self.order_id), seller_id=str(self.seller_id), confirmed_at=now))
        elif action == SellerAction.DISPATCH:
            self.status = OrderStatus.SHIPPED.value
            self.shipped_at = now
            self.raise_(SellerOrderDispatched(order_id=str(self.order_id), seller_id=str(self.seller_id), shipped_at=now))
        else:
            self.status = OrderStatus.CANCELLED.value
            self.cancelled_at = now
            self.raise_(
                SellerOrderRejected(
                    order_id=str(self.order_id),
                    seller_id=str(self.seller_id),
                    previous_status=current.value,
                    cancelled_at=now,
                )
            )
        self.updated_at = now
        return current
