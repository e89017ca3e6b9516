import json
import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
PICKUP_ADDRESS = {
    "street": "4 Weavers Lane",
    "district": "Old City",
    "city": "Varanasi",
    "state": "Uttar Pradesh",
    "zip_code": "221001",
    "country": "India",
}

SELLER_DOCUMENTS = {
    "pan_card_front": "https://blobs.example.com/pan-front.png",
    "pan_card_back": "https://blobs.example.com/pan-back.png",
    "aadhar_card_front": "https://blobs.example.com/aadhar-front.png",
    "aadhar_card_back": "https://blobs.example.com/aadhar-back.png",
}


@pytest.fixture()
def make_seller():
    """Register a seller application, approved unless asked otherwise."""
    from storefront.seller.application import ApplyForSeller, ApproveSeller
    from storefront.utils.processing import process

    def _make(seller_id="seller-001", approved=True, shop_name="Banaras Looms"):
        process(
            ApplyForSeller(
                user_id=seller_id,
                shop_name=shop_name,
                gst_number="09AAACB1234C1Z5",
                address=json.dumps(PICKUP_ADDRESS),
                documents=json.dumps(SELLER_DOCUMENTS),
            )
        )
        if approved:
            process(ApproveSeller(seller_id=seller_id))
        return seller_id

    return _make


@pytest.fixture()
def make_product(make_seller):
    """List a product for an approved seller and return its id."""
    from storefront.catalogue.management import ListProduct
    from storefront.utils.processing import process

    def _make(name="Silk Saree", price=100.0, stock=5, seller_id="seller-001"):
        make_seller(seller_id)
        return process(ListProduct(seller_id=seller_id, name=name, price=price, stock=stock))

    return _make


@pytest.fixture()
def make_buyer():
    """Register a buyer with one (default) address; returns (buyer_id, address_id)."""
    from storefront.buyer.addresses import AddAddress
    from storefront.buyer.registration import RegisterBuyer
    from storefront.utils.processing import process

    def _make(buyer_id="buyer-001", email="asha@example.com"):
        process(RegisterBuyer(buyer_id=buyer_id, email=email, first_name="Asha", last_name="Verma", phone="9800000001"))
        address_id = process(
            AddAddress(
                buyer_id=buyer_id,
                label="Home",
                street="12 MG Road",
                city="Bengaluru",
                state="Karnataka",
                zip_code="560001",
                country="India",
            )
        )
        return buyer_id, address_id

    return _make


@pytest.fixture()
def fill_cart():
    """Add ``(product_id, quantity)`` lines to a buyer's cart."""
    from storefront.cart.items import AddToCart
    from storefront.utils.processing import process

    def _fill(buyer_id, *lines):
        for product_id, quantity in lines:
            process(AddToCart(buyer_id=buyer_id, product_id=product_id, quantity=quantity))

    return _fill


@pytest.fixture()
def checkout():
    from storefront.checkout.checkout import PlaceOrder
    from storefront.utils.processing import process

    def _checkout(buyer_id, address_id, payment_method="cod", notes=None):
        return process(
            PlaceOrder(buyer_id=buyer_id, address_id=address_id, payment_method=payment_method, notes=notes)
        )

    return _checkout


@pytest.fixture()
def seller_action():
    from storefront.fulfillment.actions import ApplySellerAction
    from storefront.utils.processing import process

    def _act(order_id, action, seller_id="seller-001"):
        return process(ApplySellerAction(seller_id=seller_id, order_id=str(order_id), action=action))

    return _act
