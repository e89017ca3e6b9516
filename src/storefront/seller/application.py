"""Seller application and approval: commands and handler."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.errors import NotFound
from storefront.seller.seller import Seller
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Seller")
class ApplyForSeller:
    user_id = Identifier(required=True)
    shop_name = String(required=True, max_length=255)
    gst_number = String(required=True, max_length=50)
    address = Text(required=True)  # JSON: pickup address dict
    documents = Text(required=True)  # JSON: document URL dict


@storefront.command(part_of="Seller")
class ApproveSeller:
    seller_id = Identifier(required=True)


@storefront.command_handler(part_of=Seller)
class SellerApplicationHandler:
    @handle(ApplyForSeller)
    def apply_for_seller(self, command):
        address = json.loads(command.address) if isinstance(command.address, str) else command.address
        documents = json.loads(command.documents) if isinstance(command.documents, str) else command.documents

        repo = current_domain.repository_for(Seller)
        try:
            seller = repo.get(str(command.user_id))
            seller.submit_application(command.shop_name, command.gst_number, address, documents)
        except ObjectNotFoundError:
            seller = Seller.register(
                user_id=command.user_id,
                shop_name=command.shop_name,
                gst_number=command.gst_number,
                address=address,
                documents=documents,
            )
        repo.add(seller)
        logger.info("Seller application submitted", seller_id=str(seller.id))
        return str(seller.id)

    @handle(ApproveSeller)
    def approve_seller(self, command):
        repo = current_domain.repository_for(Seller)
        try:
            seller = repo.get(str(command.seller_id))
        except ObjectNotFoundError as exc:
            raise NotFound("Seller application not found") from exc

        seller.approve()
        repo.add(seller)
        logger.info("Seller approved", seller_id=str(seller.id))
        return str(seller.id)
