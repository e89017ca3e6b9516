"""Seller actions on their share of an order: accept, reject, dispatch."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.ledger import InventoryLedger
from storefront.domain import storefront
from storefront.errors import Forbidden
from storefront.order.order import Order, OrderStatus
from storefront.order.seller_order import SellerAction, SellerOrder
from storefront.seller.access import require_approved_seller
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ACTION_MESSAGES = {
    SellerAction.ACCEPT: "Order accepted successfully",
    SellerAction.DISPATCH: "Order dispatched successfully",
    SellerAction.REJECT: "Order rejected and stock restored",
}


@storefront.command(part_of="SellerOrder")
class ApplySellerAction:
    seller_id = Identifier(required=True)
    order_id = Identifier(required=True)
    action = String(required=True, max_length=20)


def _restore_stock(ledger, items, previous_status):
    for item in items:
        if previous_status == OrderStatus.PENDING:
            ledger.release(item.product_id, item.quantity)
        else:
            ledger.increment(item.product_id, item.quantity)


@storefront.command_handler(part_of=SellerOrder)
class SellerActionHandler:
    @handle(ApplySellerAction)
    def apply_seller_action(self, command):
        require_approved_seller(command.seller_id)
        action = SellerAction.parse(command.action)

        sub_order_repo = current_domain.repository_for(SellerOrder)
        sub_orders = sub_order_repo.for_order(command.order_id)
        mine = next((s for s in sub_orders if str(s.seller_id) == str(command.seller_id)), None)
        if mine is None:
            raise Forbidden("No items in this order belong to you")

        try:
            order = current_domain.repository_for(Order).get(str(command.order_id))
        except ObjectNotFoundError as exc:
            raise Forbidden("No items in this order belong to you") from exc

        previous_status = mine.apply(action)

        ledger = InventoryLedger()
        items = order.items_for(command.seller_id)
        if action == SellerAction.ACCEPT:
            for item in items:
                ledger.decrement(item.product_id, item.quantity, from_reservation=True)
        elif action == SellerAction.REJECT:
            _restore_stock(ledger, items, previous_status)

        sub_order_repo.add(mine)
        order.sync_status([s.status for s in sub_orders])
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Seller action applied",
            order_id=str(order.id),
            seller_id=str(command.seller_id),
            action=action.name.lower(),
            seller_status=mine.status,
            order_status=order.status,
        )
        return order, ACTION_MESSAGES[action]
