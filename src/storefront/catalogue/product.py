"""Product aggregate: the authoritative stock ledger for one product.

Stock Level Model:
    stock:     Physical count on the seller's shelf
    reserved:  Held for placed orders that the seller has not accepted yet
    available: stock - reserved (what checkout may still sell)

Checkout reserves, a seller's acceptance commits the reservation (stock and
reserved both drop), and a rejection either releases the reservation or puts
committed units back on the shelf.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from storefront.catalogue.events import (
    ProductListed,
    StockDecremented,
    StockIncremented,
    StockLevelSet,
    StockReleased,
    StockReserved,
)
from storefront.domain import storefront
from storefront.errors import InsufficientStock, ValidationFailed


def _positive(quantity):
    if quantity is None or int(quantity) <= 0:
        raise ValidationFailed("Quantity must be positive")
    return int(quantity)


@storefront.aggregate
class Product:
    seller_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    category = String(max_length=100)
    sku = String(max_length=50)
    price = Float(required=True)
    stock = Integer(default=0)
    reserved = Integer(default=0)
    is_available = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Price must be greater than zero"]})

    @invariant.post
    def stock_levels_never_negative(self):
        if (self.stock or 0) < 0 or (self.reserved or 0) < 0:
            raise ValidationError({"stock": ["Stock levels cannot be negative"]})

    @invariant.post
    def reserved_units_must_be_on_hand(self):
        if (self.reserved or 0) > (self.stock or 0):
            raise ValidationError({"reserved": ["Cannot hold more units than are in stock"]})

    @property
    def available(self):
        return (self.stock or 0) - (self.reserved or 0)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, seller_id, name, price, stock, description=None, category=None, sku=None):
        if price is None or price <= 0:
            raise ValidationFailed("Valid price is required")
        if stock is None or stock < 0:
            raise ValidationFailed("Valid stock is required")

        now = datetime.now(UTC)
        product = cls(
            seller_id=seller_id,
            name=name.strip(),
            description=description,
            category=category,
            sku=sku,
            price=price,
            stock=stock,
            reserved=0,
            is_available=True,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductListed(
                product_id=str(product.id),
                seller_id=str(seller_id),
                name=product.name,
                price=price,
                stock=stock,
                listed_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Ledger operations
    # -------------------------------------------------------------------
    def reserve(self, quantity):
        """Hold units for an order. On-hand stock is unchanged."""
        quantity = _positive(quantity)
        if not self.is_available:
            raise InsufficientStock(
                f'"{self.name}" is no longer available',
                product_id=str(self.id),
                available=0,
            )
        if quantity > self.available:
            raise InsufficientStock(
                f'Only {self.available} units left for "{self.name}"',
                product_id=str(self.id),
                available=self.available,
            )

        self.reserved = (self.reserved or 0) + quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockReserved(
                product_id=str(self.id),
                quantity=quantity,
                new_reserved=self.reserved,
                new_available=self.available,
            )
        )

    def release(self, quantity):
        """Return held units to the sellable pool."""
        quantity = _positive(quantity)
        if quantity > (self.reserved or 0):
            raise InsufficientStock(
                f'Cannot release {quantity} units of "{self.name}": only {self.reserved or 0} reserved',
                product_id=str(self.id),
                available=self.available,
            )

        self.reserved = self.reserved - quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockReleased(
                product_id=str(self.id),
                quantity=quantity,
                new_reserved=self.reserved,
                new_available=self.available,
            )
        )

    def decrement(self, quantity, from_reservation=False):
        """Take units off the shelf.

        With ``from_reservation`` the units are ones already held for an
        order, so they leave ``reserved`` as well.
        """
        quantity = _positive(quantity)
        previous_stock = self.stock or 0
        if from_reservation:
            if quantity > (self.reserved or 0) or quantity > previous_stock:
                raise InsufficientStock(
                    f'Cannot commit {quantity} units of "{self.name}": only {self.reserved or 0} reserved',
                    product_id=str(self.id),
                    available=self.available,
                )
        elif quantity > self.available:
            raise InsufficientStock(
                f'Only {self.available} units left for "{self.name}"',
                product_id=str(self.id),
                available=self.available,
            )

        with atomic_change(self):
            self.stock = previous_stock - quantity
            if from_reservation:
                self.reserved = self.reserved - quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockDecremented(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
                new_reserved=self.reserved or 0,
            )
        )

    def increment(self, quantity):
        """Put units back on the shelf."""
        quantity = _positive(quantity)
        previous_stock = self.stock or 0

        self.stock = previous_stock + quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockIncremented(
                product_id=str(self.id),
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
            )
        )

    def set_stock(self, new_stock):
        """Administrative overwrite of the on-hand count by the owning seller."""
        if new_stock is None or new_stock < 0:
            raise ValidationFailed("Stock must be 0 or greater")
        if new_stock < (self.reserved or 0):
            raise ValidationFailed(
                f"Stock cannot be set below the {self.reserved} units reserved for open orders"
            )

        previous_stock = self.stock or 0
        self.stock = new_stock
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockLevelSet(
                product_id=str(self.id),
                seller_id=str(self.seller_id),
                previous_stock=previous_stock,
                new_stock=new_stock,
            )
        )
