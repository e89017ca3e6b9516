"""Domain events for the Buyer aggregate."""

from protean.fields import Boolean, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Buyer")
class BuyerRegistered:
    __version__ = 1

    buyer_id = Identifier(required=True)
    email = String(required=True)


@storefront.event(part_of="Buyer")
class AddressAdded:
    __version__ = 1

    buyer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    is_default = Boolean()


@storefront.event(part_of="Buyer")
class AddressUpdated:
    __version__ = 1

    buyer_id = Identifier(required=True)
    address_id = Identifier(required=True)


@storefront.event(part_of="Buyer")
class AddressRemoved:
    __version__ = 1

    buyer_id = Identifier(required=True)
    address_id = Identifier(required=True)


@storefront.event(part_of="Buyer")
class DefaultAddressChanged:
    __version__ = 1

    buyer_id = Identifier(required=True)
    address_id = Identifier(required=True)
    previous_default_address_id = Identifier()
