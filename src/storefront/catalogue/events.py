"""Domain events for the Product aggregate and its stock ledger."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductListed:
    """An approved seller put a new product on sale."""

    __version__ = 1

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    listed_at = DateTime(required=True)


@storefront.event(part_of="Product")
class StockReserved:
    """Units were held against an order at checkout."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    new_reserved = Integer(required=True)
    new_available = Integer(required=True)


@storefront.event(part_of="Product")
class StockReleased:
    """Held units were returned without leaving the shelf."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    new_reserved = Integer(required=True)
    new_available = Integer(required=True)


@storefront.event(part_of="Product")
class StockDecremented:
    """Units left the shelf (an accepted order, or a manual removal)."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    new_reserved = Integer(required=True)


@storefront.event(part_of="Product")
class StockIncremented:
    """Units were put back on the shelf."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)


@storefront.event(part_of="Product")
class StockLevelSet:
    """The owning seller overwrote the on-hand count."""

    __version__ = 1

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
