"""Shopping Cart aggregate: the buyer's pre-checkout selection.

A buyer has at most one Active cart, created lazily on the first add. Lines
hold only a product reference and a quantity; prices are read live from the
catalogue until checkout snapshots them into the order.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.events import (
    CartConverted,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.errors import NotFound, ValidationFailed


class CartStatus(Enum):
    ACTIVE = "Active"
    CONVERTED = "Converted"


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class ShoppingCart:
    buyer_id = Identifier(required=True)
    items = HasMany(CartItem)
    status = String(choices=CartStatus, default=CartStatus.ACTIVE.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(i.product_id) for i in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product may appear only once in a cart"]})

    @classmethod
    def create(cls, buyer_id):
        now = datetime.now(UTC)
        return cls(
            buyer_id=str(buyer_id),
            status=CartStatus.ACTIVE.value,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_active(self):
        return self.status == CartStatus.ACTIVE.value

    def line(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def _ensure_active(self):
        if not self.is_active:
            raise ValidationFailed("This cart has already been checked out")

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add(self, product_id, quantity):
        """Increase the line's quantity, or add a new line."""
        self._ensure_active()
        if quantity is None or quantity <= 0:
            raise ValidationFailed("Quantity must be positive")

        existing = self.line(product_id)
        if existing:
            self._set_quantity(existing, existing.quantity + quantity)
        else:
            self._add_line(product_id, quantity)

    def add_or_update(self, product_id, quantity):
        """Set the line's quantity; zero or less removes it."""
        self._ensure_active()
        if quantity is None or quantity <= 0:
            if self.line(product_id):
                self.remove(product_id)
            return

        existing = self.line(product_id)
        if existing:
            self._set_quantity(existing, quantity)
        else:
            self._add_line(product_id, quantity)

    def remove(self, product_id):
        self._ensure_active()
        item = self.line(product_id)
        if item is None:
            raise NotFound("Item not found in cart")

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))

    def clear(self):
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)

    def convert_to_order(self, order_id):
        """Close the cart after a successful checkout."""
        self._ensure_active()
        snapshot = [{"product_id": str(i.product_id), "quantity": i.quantity} for i in self.items]
        self.clear()
        self.status = CartStatus.CONVERTED.value
        self.raise_(
            CartConverted(
                cart_id=str(self.id),
                buyer_id=str(self.buyer_id),
                order_id=str(order_id),
                items=json.dumps(snapshot),
            )
        )

    def _add_line(self, product_id, quantity):
        now = datetime.now(UTC)
        self.add_items(CartItem(product_id=str(product_id), quantity=quantity, added_at=now))
        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                buyer_id=str(self.buyer_id),
                product_id=str(product_id),
                quantity=quantity,
            )
        )

    def _set_quantity(self, item, quantity):
        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(item.product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    def snapshot(self):
        return CartSnapshot(self)

    @property
    def estimated_total(self):
        return self.snapshot().total


class CartSnapshot:
    """Iterable of ``(product, quantity, current_price)`` over a cart.

    Products are loaded on iteration, so every pass reflects the catalogue
    as it is now. Lines whose product has been removed are skipped.
    """

    def __init__(self, cart):
        self.cart = cart

    def __iter__(self):
        repo = current_domain.repository_for(Product)
        for item in list(self.cart.items):
            try:
                product = repo.get(str(item.product_id))
            except ObjectNotFoundError:
                continue
            yield product, item.quantity, product.price

    @property
    def total(self):
        return round(sum(price * quantity for _, quantity, price in self), 2)
