"""Order aggregate: a buyer's placed purchase.

Items snapshot the product name, seller and unit price at checkout, so later
catalogue changes never touch a placed order. Each seller drives its own
share of the order through a SellerOrder; the Order's status is derived from
those sub-order statuses:

    all cancelled                      -> cancelled
    any pending (ignoring cancelled)   -> pending
    any confirmed (ignoring cancelled) -> confirmed
    otherwise                          -> shipped
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from storefront import settings
from storefront.domain import storefront
from storefront.order.events import OrderPlaced, OrderStatusChanged


class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    CANCELLED = "cancelled"


def derive_order_status(statuses):
    """Order status from its sub-order statuses."""
    statuses = [OrderStatus(s) for s in statuses]
    live = [s for s in statuses if s != OrderStatus.CANCELLED]
    if not live:
        return OrderStatus.CANCELLED
    if OrderStatus.PENDING in live:
        return OrderStatus.PENDING
    if OrderStatus.CONFIRMED in live:
        return OrderStatus.CONFIRMED
    return OrderStatus.SHIPPED


@storefront.value_object(part_of="Order")
class DeliveryAddress:
    """Where the order ships, as the buyer's address read at checkout."""

    label = String(max_length=20)
    street = String(max_length=255)
    district = String(max_length=100)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    seller_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True)
    total_price = Float(required=True)


@storefront.aggregate
class Order:
    buyer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    delivery_address = ValueObject(DeliveryAddress)
    items = HasMany(OrderItem)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_method = String(max_length=20, default="cod")
    payment_status = String(max_length=20, default=settings.COD_PAYMENT_STATUS)
    shipping_method = String(max_length=20, default=settings.DEFAULT_SHIPPING_METHOD)
    total_amount = Float(default=0.0)
    discount = Float(default=0.0)
    shipping_charge = Float(default=0.0)
    final_amount = Float(default=0.0)
    notes = Text()
    placed_at = DateTime()
    confirmed_at = DateTime()
    shipped_at = DateTime()
    cancelled_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def final_amount_matches_totals(self):
        expected = round((self.total_amount or 0) - (self.discount or 0) + (self.shipping_charge or 0), 2)
        if round(self.final_amount or 0, 2) != expected:
            raise ValidationError({"final_amount": ["Final amount must equal total - discount + shipping"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, buyer_id, address, lines, payment_method, notes=None):
        """Create a pending order.

        ``lines`` are ``(product, quantity)`` pairs; each product's current
        name, seller and price are copied onto the item.
        """
        now = datetime.now(UTC)
        items = [
            OrderItem(
                product_id=str(product.id),
                product_name=product.name,
                seller_id=str(product.seller_id),
                quantity=quantity,
                unit_price=product.price,
                total_price=round(product.price * quantity, 2),
            )
            for product, quantity in lines
        ]
        total = round(sum(item.total_price for item in items), 2)

        order = cls(
            buyer_id=str(buyer_id),
            address_id=str(address.id),
            delivery_address=DeliveryAddress(
                label=address.label,
                street=address.street,
                district=address.district,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
            ),
            items=items,
            status=OrderStatus.PENDING.value,
            payment_method=payment_method,
            payment_status=settings.COD_PAYMENT_STATUS,
            shipping_method=settings.DEFAULT_SHIPPING_METHOD,
            total_amount=total,
            discount=0.0,
            shipping_charge=0.0,
            final_amount=total,
            notes=notes,
            placed_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                buyer_id=str(buyer_id),
                item_count=len(items),
                final_amount=total,
                payment_method=payment_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def seller_ids(self):
        """Distinct sellers in item order."""
        return list(dict.fromkeys(str(item.seller_id) for item in self.items))

    def items_for(self, seller_id):
        return [item for item in self.items if str(item.seller_id) == str(seller_id)]

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def sync_status(self, sub_order_statuses):
        """Recompute the status from the sub-orders; stamps first arrivals."""
        new_status = derive_order_status(sub_order_statuses)
        previous_status = OrderStatus(self.status)
        if new_status == previous_status:
            return

        now = datetime.now(UTC)
        self.status = new_status.value
        if new_status == OrderStatus.CONFIRMED and self.confirmed_at is None:
            self.confirmed_at = now
        elif new_status == OrderStatus.SHIPPED:
            # A multi-seller order can skip the derived confirmed status
            if self.confirmed_at is None:
                self.confirmed_at = now
            if self.shipped_at is None:
                self.shipped_at = now
        elif new_status == OrderStatus.CANCELLED and self.cancelled_at is None:
            self.cancelled_at = now
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status.value,
                new_status=new_status.value,
                changed_at=now,
            )
        )
