"""Domain tests for the ShoppingCart aggregate."""

import json

import pytest

from storefront.cart.cart import CartStatus, ShoppingCart
from storefront.cart.events import CartConverted, CartItemAdded, CartQuantityUpdated
from storefront.errors import NotFound, ValidationFailed


def _cart():
    return ShoppingCart.create(buyer_id="buyer-001")


class TestCartCreation:
    def test_new_cart_is_active_and_empty(self):
        cart = _cart()
        assert cart.status == CartStatus.ACTIVE.value
        assert cart.items == []
        assert cart.is_active


class TestAdd:
    def test_add_new_line(self):
        cart = _cart()
        cart.add("prod-001", 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert isinstance(cart._events[-1], CartItemAdded)

    def test_add_merges_into_existing_line(self):
        cart = _cart()
        cart.add("prod-001", 2)
        cart.add("prod-001", 3)
        assert len(cart.items) == 1
        assert cart.line("prod-001").quantity == 5
        assert isinstance(cart._events[-1], CartQuantityUpdated)

    def test_add_rejects_non_positive_quantity(self):
        with pytest.raises(ValidationFailed):
            _cart().add("prod-001", 0)


class TestAddOrUpdate:
    def test_sets_quantity_of_existing_line(self):
        cart = _cart()
        cart.add("prod-001", 2)
        cart.add_or_update("prod-001", 7)
        assert cart.line("prod-001").quantity == 7

    def test_adds_missing_line(self):
        cart = _cart()
        cart.add_or_update("prod-002", 1)
        assert cart.line("prod-002").quantity == 1

    def test_zero_removes_the_line(self):
        cart = _cart()
        cart.add("prod-001", 2)
        cart.add_or_update("prod-001", 0)
        assert cart.line("prod-001") is None

    def test_negative_on_missing_line_is_a_no_op(self):
        cart = _cart()
        cart.add_or_update("prod-001", -1)
        assert cart.items == []


class TestRemoveAndClear:
    def test_remove(self):
        cart = _cart()
        cart.add("prod-001", 1)
        cart.add("prod-002", 1)
        cart.remove("prod-001")
        assert [str(i.product_id) for i in cart.items] == ["prod-002"]

    def test_remove_unknown_product(self):
        with pytest.raises(NotFound):
            _cart().remove("prod-404")

    def test_clear(self):
        cart = _cart()
        cart.add("prod-001", 1)
        cart.add("prod-002", 4)
        cart.clear()
        assert cart.items == []


class TestConversion:
    def test_convert_closes_the_cart(self):
        cart = _cart()
        cart.add("prod-001", 2)
        cart.convert_to_order("order-001")

        assert cart.status == CartStatus.CONVERTED.value
        assert cart.items == []

        event = cart._events[-1]
        assert isinstance(event, CartConverted)
        assert json.loads(event.items) == [{"product_id": "prod-001", "quantity": 2}]

    def test_converted_cart_rejects_changes(self):
        cart = _cart()
        cart.add("prod-001", 2)
        cart.convert_to_order("order-001")
        with pytest.raises(ValidationFailed):
            cart.add("prod-001", 1)
