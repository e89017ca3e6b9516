"""Cart item management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.catalogue.ledger import InventoryLedger
from storefront.domain import storefront
from storefront.errors import NotFound, ValidationFailed
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="ShoppingCart")
class UpdateCartItem:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    buyer_id = Identifier(required=True)
    product_id = Identifier(required=True)


def cart_for(buyer_id):
    """The buyer's active cart, or None."""
    return current_domain.repository_for(ShoppingCart).active_cart_for(buyer_id)


def _sellable_product(product_id):
    product = InventoryLedger().product(product_id)
    if not product.is_available:
        raise ValidationFailed(f'"{product.name}" is no longer available')
    return product


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        _sellable_product(command.product_id)

        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.active_cart_for(command.buyer_id) or ShoppingCart.create(command.buyer_id)
        cart.add(command.product_id, command.quantity)
        repo.add(cart)

        logger.info(
            "Item added to cart",
            buyer_id=str(command.buyer_id),
            product_id=str(command.product_id),
            quantity=command.quantity,
        )
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.active_cart_for(command.buyer_id)
        if command.quantity is not None and command.quantity > 0:
            _sellable_product(command.product_id)
            cart = cart or ShoppingCart.create(command.buyer_id)
        elif cart is None:
            return None

        cart.add_or_update(command.product_id, command.quantity)
        repo.add(cart)
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.active_cart_for(command.buyer_id)
        if cart is None:
            raise NotFound("Item not found in cart")

        cart.remove(command.product_id)
        repo.add(cart)
        logger.info("Item removed from cart", buyer_id=str(command.buyer_id), product_id=str(command.product_id))
        return str(cart.id)
