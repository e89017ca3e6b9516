"""Buyer address book: commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.buyer.buyer import Buyer
from storefront.buyer.registration import load_buyer
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Buyer")
class AddAddress:
    """Add a new address to a buyer's address book."""

    buyer_id = Identifier(required=True)
    label = String(max_length=20)
    street = String(required=True, max_length=255)
    district = String(max_length=100)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    is_default = Boolean(default=False)


@storefront.command(part_of="Buyer")
class UpdateAddress:
    """Modify fields of an existing address."""

    buyer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    label = String(max_length=20)
    street = String(max_length=255)
    district = String(max_length=100)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)
    is_default = Boolean()


@storefront.command(part_of="Buyer")
class RemoveAddress:
    buyer_id = Identifier(required=True)
    address_id = Identifier(required=True)


@storefront.command(part_of="Buyer")
class SetDefaultAddress:
    buyer_id = Identifier(required=True)
    address_id = Identifier(required=True)


def _address_fields(command):
    return {
        "label": command.label,
        "street": command.street,
        "district": command.district,
        "city": command.city,
        "state": command.state,
        "zip_code": command.zip_code,
        "country": command.country,
    }


@storefront.command_handler(part_of=Buyer)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        buyer = load_buyer(command.buyer_id)
        address = buyer.add_address(is_default=bool(command.is_default), **_address_fields(command))
        current_domain.repository_for(Buyer).add(buyer)
        logger.info("Address added", buyer_id=str(buyer.id), address_id=str(address.id))
        return str(address.id)

    @handle(UpdateAddress)
    def update_address(self, command):
        buyer = load_buyer(command.buyer_id)
        buyer.update_address(command.address_id, is_default=command.is_default, **_address_fields(command))
        current_domain.repository_for(Buyer).add(buyer)
        return str(command.address_id)

    @handle(RemoveAddress)
    def remove_address(self, command):
        buyer = load_buyer(command.buyer_id)
        buyer.remove_address(command.address_id)
        current_domain.repository_for(Buyer).add(buyer)
        logger.info("Address removed", buyer_id=str(buyer.id), address_id=str(command.address_id))

    @handle(SetDefaultAddress)
    def set_default_address(self, command):
        buyer = load_buyer(command.buyer_id)
        buyer.set_default_address(command.address_id)
        current_domain.repository_for(Buyer).add(buyer)
        return str(command.address_id)
