"""Stock ledger commands and handler.

Each command is one atomic ledger operation on a single product.
"""

from protean import handle
from protean.fields import Boolean, Identifier, Integer

from storefront.catalogue.ledger import InventoryLedger
from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class ReserveStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Product")
class ReleaseStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Product")
class DecrementStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    from_reservation = Boolean(default=False)


@storefront.command(part_of="Product")
class IncrementStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command_handler(part_of=Product)
class StockLedgerHandler:
    @handle(ReserveStock)
    def reserve_stock(self, command):
        product = InventoryLedger().reserve(command.product_id, command.quantity)
        return product.available

    @handle(ReleaseStock)
    def release_stock(self, command):
        product = InventoryLedger().release(command.product_id, command.quantity)
        return product.available

    @handle(DecrementStock)
    def decrement_stock(self, command):
        product = InventoryLedger().decrement(
            command.product_id,
            command.quantity,
            from_reservation=bool(command.from_reservation),
        )
        return product.stock

    @handle(IncrementStock)
    def increment_stock(self, command):
        product = InventoryLedger().increment(command.product_id, command.quantity)
        return product.stock
