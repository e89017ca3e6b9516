"""BDD tests for seller fulfillment."""

from pytest_bdd import given, parsers, scenarios, then, when

from storefront.errors import Forbidden, InvalidTransition

scenarios("seller_fulfillment.feature")


@given(parsers.parse('the seller marked the order "{action}"'))
def _(world, seller_action, action):
    seller_action(world["order_id"], action, seller_id=world["seller_id"])


@when(parsers.parse('the seller marks the order "{action}"'), target_fixture="outcome")
def _(world, seller_action, capture, action):
    return capture(lambda: seller_action(world["order_id"], action, seller_id=world["seller_id"]))


@when(parsers.parse('"{seller_id}" marks the order "{action}"'), target_fixture="outcome")
def _(world, seller_action, capture, seller_id, action):
    return capture(lambda: seller_action(world["order_id"], action, seller_id=seller_id))


@then(parsers.parse('the seller is told "{message}"'))
def _(outcome, message):
    _, told = outcome
    assert told == message


@then(parsers.parse('the action fails with "{message}"'))
def _(world, outcome, message):
    assert outcome is None
    assert isinstance(world["error"], InvalidTransition)
    assert world["error"].message == message


@then(parsers.parse('the action is forbidden with "{message}"'))
def _(world, outcome, message):
    assert outcome is None
    assert isinstance(world["error"], Forbidden)
    assert world["error"].message == message
