"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from storefront.cart.items import cart_for
from storefront.catalogue.product import Product
from storefront.errors import StorefrontError
from storefront.order.order import Order


@pytest.fixture()
def world():
    """Mutable scenario state shared between steps."""
    return {"products": {}, "error": None}


@pytest.fixture()
def capture(world):
    """Run a step action, keeping any storefront error for Then steps."""

    def _capture(action):
        try:
            return action()
        except StorefrontError as exc:
            world["error"] = exc
            return None

    return _capture


def product_named(world, name):
    return current_domain.repository_for(Product).get(world["products"][name])


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.parse('an approved seller "{seller_id}"'))
def _(world, make_seller, seller_id):
    world.setdefault("seller_id", seller_id)
    make_seller(seller_id)


@given(parsers.parse('the seller lists "{name}" at {price:f} with {stock:d} in stock'))
def _(world, make_product, name, price, stock):
    world["products"][name] = make_product(name=name, price=price, stock=stock, seller_id=world["seller_id"])


@given(parsers.parse('a registered buyer "{buyer_id}" with a delivery address'))
def _(world, make_buyer, buyer_id):
    world["buyer_id"], world["address_id"] = make_buyer(buyer_id=buyer_id)


@given(parsers.parse('the buyer\'s cart holds {quantity:d} of "{name}"'))
def _(world, fill_cart, quantity, name):
    fill_cart(world["buyer_id"], (world["products"][name], quantity))


@given(parsers.parse('the buyer has placed an order for {quantity:d} of "{name}"'))
def _(world, fill_cart, checkout, quantity, name):
    fill_cart(world["buyer_id"], (world["products"][name], quantity))
    world["order_id"] = checkout(world["buyer_id"], world["address_id"]).id


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.parse('"{name}" still has {stock:d} in stock'))
def _(world, name, stock):
    assert product_named(world, name).stock == stock


@then(parsers.parse('"{name}" has {available:d} available'))
def _(world, name, available):
    assert product_named(world, name).available == available


@then(parsers.parse('the order status is "{status}"'))
def _(world, status):
    assert current_domain.repository_for(Order).get(world["order_id"]).status == status


@then("the buyer has no cart")
def _(world):
    assert cart_for(world["buyer_id"]) is None


@then("the buyer has no orders")
def _(world):
    assert current_domain.repository_for(Order).for_buyer(world["buyer_id"]) == []


@then(parsers.parse('the buyer\'s cart still holds {quantity:d} of "{name}"'))
def _(world, quantity, name):
    assert cart_for(world["buyer_id"]).line(world["products"][name]).quantity == quantity
