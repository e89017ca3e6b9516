"""Checkout: turn the buyer's cart into a pending order.

Checks run in a fixed order and the first failure wins:

1. the buyer exists and owns the delivery address
2. the payment method is supported
3. there is an active, non-empty cart
4. every line's product is on sale with enough available stock

After that the handler reserves stock, creates the order and one sub-order
per seller, and converts the cart. The handler is one unit of work, so a
failure at any point leaves nothing behind.
"""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront import settings
from storefront.buyer.registration import load_buyer
from storefront.cart.cart import ShoppingCart
from storefront.catalogue.ledger import InventoryLedger
from storefront.domain import storefront
from storefront.errors import EmptyCart, NotFound, OutOfStock, UnsupportedPaymentMethod
from storefront.order.order import Order
from storefront.order.seller_order import SellerOrder
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    buyer_id = Identifier(required=True)
    address_id = Identifier()
    payment_method = String(max_length=20)
    notes = Text()


def _checked_lines(cart, ledger):
    lines = []
    for item in cart.items:
        try:
            product = ledger.product(item.product_id)
        except NotFound as exc:
            raise OutOfStock(
                "A product in your cart is no longer available",
                product_id=str(item.product_id),
                available=0,
            ) from exc

        if not product.is_available:
            raise OutOfStock(
                f'"{product.name}" is no longer available',
                product_id=str(product.id),
                available=0,
            )
        if product.available < item.quantity:
            raise OutOfStock(
                f'Only {product.available} units left for "{product.name}"',
                product_id=str(product.id),
                available=product.available,
            )
        lines.append((product, item.quantity))
    return lines


@storefront.command_handler(part_of=Order)
class CheckoutHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        buyer = load_buyer(command.buyer_id)
        address = buyer.owned_address(command.address_id)

        if command.payment_method not in settings.SUPPORTED_PAYMENT_METHODS:
            raise UnsupportedPaymentMethod(
                f"Payment method '{command.payment_method}' is not supported. Only cash on delivery is available"
            )

        cart_repo = current_domain.repository_for(ShoppingCart)
        cart = cart_repo.active_cart_for(buyer.id)
        if cart is None or not cart.items:
            raise EmptyCart("Your cart is empty")

        ledger = InventoryLedger()
        lines = _checked_lines(cart, ledger)

        for product, quantity in lines:
            ledger.reserve(product.id, quantity)

        order = Order.place(
            buyer_id=buyer.id,
            address=address,
            lines=lines,
            payment_method=command.payment_method,
            notes=command.notes,
        )
        current_domain.repository_for(Order).add(order)

        sub_order_repo = current_domain.repository_for(SellerOrder)
        for seller_id in order.seller_ids:
            sub_order_repo.add(SellerOrder.open(order.id, seller_id, buyer.id))

        cart.convert_to_order(order.id)
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            buyer_id=str(buyer.id),
            item_count=len(order.items),
            final_amount=order.final_amount,
        )
        return order
