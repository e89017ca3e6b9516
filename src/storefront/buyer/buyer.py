"""Buyer aggregate root with the Address entity.

The buyer's id is the id issued by the auth provider.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, String

from storefront.buyer.events import (
    AddressAdded,
    AddressRemoved,
    AddressUpdated,
    BuyerRegistered,
    DefaultAddressChanged,
)
from storefront.domain import storefront
from storefront.errors import InvalidAddress, ValidationFailed

_ADDRESS_FIELDS = ("label", "street", "district", "city", "state", "zip_code", "country")


@storefront.entity(part_of="Buyer")
class Address:
    """A delivery address in the buyer's address book.

    Exactly one address is the default whenever the buyer has any.
    """

    label = String(max_length=20, default="Home")
    street = String(max_length=255)
    district = String(max_length=100)
    city = String(max_length=100)
    state = String(max_length=100)
    zip_code = String(max_length=20)
    country = String(max_length=100)
    is_default = Boolean(default=False)


@storefront.aggregate
class Buyer:
    email = String(required=True, max_length=255)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    phone = String(max_length=20)
    addresses = HasMany(Address)
    registered_at = DateTime()

    @invariant.post
    def exactly_one_default_address_when_addresses_exist(self):
        if not self.addresses:
            return
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) != 1:
            raise ValidationError({"addresses": ["Exactly one address must be marked as default"]})

    @property
    def display_name(self):
        return " ".join(part for part in (self.first_name, self.last_name) if part) or "Customer"

    @classmethod
    def register(cls, buyer_id, email, first_name=None, last_name=None, phone=None):
        buyer = cls(
            id=str(buyer_id),
            email=email,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            registered_at=datetime.now(UTC),
        )
        buyer.raise_(BuyerRegistered(buyer_id=str(buyer.id), email=email))
        return buyer

    def address(self, address_id):
        """The buyer's address with this id, or None."""
        return next((a for a in self.addresses if str(a.id) == str(address_id)), None)

    def owned_address(self, address_id):
        address = self.address(address_id) if address_id else None
        if address is None:
            raise InvalidAddress("Address not found")
        return address

    def add_address(self, is_default=False, **fields):
        # First address is always default
        if not self.addresses:
            is_default = True

        with atomic_change(self):
            if is_default:
                for addr in self.addresses:
                    if addr.is_default:
                        addr.is_default = False

            address = Address(
                is_default=is_default,
                **{k: v for k, v in fields.items() if k in _ADDRESS_FIELDS and v is not None},
            )
            self.add_addresses(address)

        self.raise_(
            AddressAdded(
                buyer_id=str(self.id),
                address_id=str(address.id),
                is_default=is_default,
            )
        )
        return address

    def update_address(self, address_id, is_default=None, **fields):
        address = self.owned_address(address_id)
        if is_default is False and address.is_default:
            raise ValidationFailed("Choose another default address instead of unsetting this one")

        for field, value in fields.items():
            if field in _ADDRESS_FIELDS and value is not None:
                setattr(address, field, value)

        self.raise_(AddressUpdated(buyer_id=str(self.id), address_id=str(address_id)))

        if is_default and not address.is_default:
            self.set_default_address(address_id)

    def remove_address(self, address_id):
        address = self.owned_address(address_id)
        was_default = address.is_default

        with atomic_change(self):
            self.remove_addresses(address)

            # Promote the first remaining address
            if was_default and self.addresses:
                self.addresses[0].is_default = True

        self.raise_(AddressRemoved(buyer_id=str(self.id), address_id=str(address_id)))

    def set_default_address(self, address_id):
        address = self.owned_address(address_id)

        previous_default = next((a for a in self.addresses if a.is_default), None)
        previous_default_id = str(previous_default.id) if previous_default else None

        with atomic_change(self):
            for addr in self.addresses:
                if addr.is_default:
                    addr.is_default = False
            address.is_default = True

        self.raise_(
            DefaultAddressChanged(
                buyer_id=str(self.id),
                address_id=str(address_id),
                previous_default_address_id=previous_default_id,
            )
        )

    def addresses_default_first(self):
        return sorted(self.addresses, key=lambda a: not a.is_default)
