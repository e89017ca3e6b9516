"""Buyer registration: command and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.buyer.buyer import Buyer
from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Buyer")
class RegisterBuyer:
    buyer_id = Identifier(required=True)
    email = String(required=True, max_length=255)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    phone = String(max_length=20)


@storefront.command_handler(part_of=Buyer)
class RegisterBuyerHandler:
    @handle(RegisterBuyer)
    def register_buyer(self, command):
        repo = current_domain.repository_for(Buyer)
        try:
            buyer = repo.get(str(command.buyer_id))
            logger.info("Buyer already registered", buyer_id=str(buyer.id))
            return str(buyer.id)
        except ObjectNotFoundError:
            pass

        buyer = Buyer.register(
            buyer_id=command.buyer_id,
            email=command.email,
            first_name=command.first_name,
            last_name=command.last_name,
            phone=command.phone,
        )
        repo.add(buyer)
        logger.info("Buyer registered", buyer_id=str(buyer.id))
        return str(buyer.id)


def load_buyer(buyer_id):
    """Fetch a buyer by principal id, raising NotFound when absent."""
    try:
        return current_domain.repository_for(Buyer).get(str(buyer_id))
    except ObjectNotFoundError as exc:
        raise NotFound("Buyer not found") from exc
