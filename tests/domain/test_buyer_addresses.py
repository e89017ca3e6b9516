"""Tests for Buyer address book behavior methods."""

import pytest

from storefront.buyer.buyer import Buyer
from storefront.buyer.events import AddressAdded, AddressRemoved, BuyerRegistered, DefaultAddressChanged
from storefront.errors import InvalidAddress, ValidationFailed


def _make_buyer():
    return Buyer.register(
        buyer_id="buyer-001",
        email="asha@example.com",
        first_name="Asha",
        last_name="Verma",
    )


def _add(buyer, street="12 MG Road", **kwargs):
    return buyer.add_address(street=street, city="Bengaluru", zip_code="560001", country="India", **kwargs)


def _defaults(buyer):
    return [a for a in buyer.addresses if a.is_default]


class TestRegistration:
    def test_id_is_the_principal(self):
        buyer = _make_buyer()
        assert buyer.id == "buyer-001"
        assert isinstance(buyer._events[-1], BuyerRegistered)

    def test_display_name(self):
        assert _make_buyer().display_name == "Asha Verma"


class TestAddAddress:
    def test_first_address_becomes_default(self):
        buyer = _make_buyer()
        address = _add(buyer)
        assert address.is_default is True
        assert isinstance(buyer._events[-1], AddressAdded)

    def test_second_address_is_not_default(self):
        buyer = _make_buyer()
        _add(buyer)
        second = _add(buyer, street="7 Park Street")
        assert second.is_default is False
        assert len(_defaults(buyer)) == 1

    def test_new_default_unsets_previous(self):
        buyer = _make_buyer()
        first = _add(buyer)
        second = _add(buyer, street="7 Park Street", is_default=True)
        assert second.is_default is True
        assert buyer.address(first.id).is_default is False
        assert len(_defaults(buyer)) == 1


class TestUpdateAddress:
    def test_update_fields(self):
        buyer = _make_buyer()
        address = _add(buyer)
        buyer.update_address(address.id, city="Mysuru")
        assert buyer.address(address.id).city == "Mysuru"

    def test_make_default_through_update(self):
        buyer = _make_buyer()
        _add(buyer)
        second = _add(buyer, street="7 Park Street")
        buyer.update_address(second.id, is_default=True)
        assert _defaults(buyer)[0].id == second.id

    def test_unsetting_the_only_default_is_rejected(self):
        buyer = _make_buyer()
        address = _add(buyer)
        with pytest.raises(ValidationFailed):
            buyer.update_address(address.id, is_default=False)
        assert buyer.address(address.id).is_default is True

    def test_unknown_address(self):
        with pytest.raises(InvalidAddress):
            _make_buyer().update_address("addr-404", city="Mysuru")


class TestRemoveAddress:
    def test_removing_default_promotes_another(self):
        buyer = _make_buyer()
        first = _add(buyer)
        second = _add(buyer, street="7 Park Street")
        buyer.remove_address(first.id)
        assert len(buyer.addresses) == 1
        assert buyer.address(second.id).is_default is True
        assert isinstance(buyer._events[-1], AddressRemoved)

    def test_removing_last_address(self):
        buyer = _make_buyer()
        address = _add(buyer)
        buyer.remove_address(address.id)
        assert buyer.addresses == []


class TestSetDefaultAddress:
    def test_switch_default(self):
        buyer = _make_buyer()
        first = _add(buyer)
        second = _add(buyer, street="7 Park Street")
        buyer.set_default_address(second.id)

        assert buyer.address(second.id).is_default is True
        assert buyer.address(first.id).is_default is False
        event = buyer._events[-1]
        assert isinstance(event, DefaultAddressChanged)
        assert event.previous_default_address_id == str(first.id)

    def test_default_listed_first(self):
        buyer = _make_buyer()
        _add(buyer)
        second = _add(buyer, street="7 Park Street")
        buyer.set_default_address(second.id)
        assert buyer.addresses_default_first()[0].id == second.id
