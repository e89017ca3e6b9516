"""Storefront load test scenarios.

BuyerCheckoutJourney: register, add an address, fill the cart, check out.
SellerFulfillmentJourney: onboard, list products, work through incoming orders.
LastUnitRushUser: many buyers race for a product with a single unit; exactly one
checkout may succeed and the rest must fail with out_of_stock.
"""

import random

import requests
from locust import HttpUser, SequentialTaskSet, between, events, task

from loadtests.data_generators import (
    ADMIN_ID,
    address_data,
    buyer_data,
    headers,
    principal,
    product_data,
    seller_application,
)
from loadtests.helpers.response import error_code, extract_error_detail
from loadtests.helpers.state import BuyerState, SellerState

# Product ids published by sellers, shared with buyers
CATALOGUE: list[str] = []
RUSH_PRODUCT: dict = {}


def onboard_seller(client, seller_id):
    client.post("/seller/apply", json=seller_application(), headers=headers(seller_id), name="POST /seller/apply")
    client.put(
        f"/admin/sellers/{seller_id}/approve",
        headers=headers(ADMIN_ID),
        name="PUT /admin/sellers/{id}/approve",
    )


class BuyerCheckoutJourney(SequentialTaskSet):
    def on_start(self):
        self.state = BuyerState(buyer_id=principal("buyer"))
        self.headers = headers(self.state.buyer_id)

    @task
    def register(self):
        with self.client.post(
            "/buyers", json=buyer_data(), headers=self.headers, catch_response=True, name="POST /buyers"
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Register failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def add_address(self):
        with self.client.post(
            "/buyers/me/addresses",
            json=address_data(is_default=True),
            headers=self.headers,
            catch_response=True,
            name="POST /buyers/me/addresses",
        ) as resp:
            if resp.status_code == 201:
                self.state.address_id = resp.json()["address_id"]
            else:
                resp.failure(f"Add address failed: {resp.status_code} {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def fill_cart(self):
        if not CATALOGUE:
            self.interrupt()
        for product_id in random.sample(CATALOGUE, k=min(3, len(CATALOGUE))):
            self.client.post(
                "/cart",
                json={"product_id": product_id, "quantity": random.randint(1, 3)},
                headers=self.headers,
                name="POST /cart",
            )
        self.client.get("/cart", headers=self.headers, name="GET /cart")

    @task
    def checkout(self):
        with self.client.post(
            "/orders",
            json={"address_id": self.state.address_id, "payment_method": "cod"},
            headers=self.headers,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                self.state.order_ids.append(resp.json()["order"]["id"])
            elif error_code(resp) in ("out_of_stock", "empty_cart"):
                # Expected under contention
                self.state.out_of_stock += 1
                resp.success()
            else:
                resp.failure(f"Checkout failed: {resp.status_code} {extract_error_detail(resp)}")

    @task
    def list_orders(self):
        self.client.get("/orders", headers=self.headers, name="GET /orders")
        self.interrupt()


class SellerFulfillmentJourney(SequentialTaskSet):
    def on_start(self):
        self.state = SellerState(seller_id=principal("seller"))
        self.headers = headers(self.state.seller_id)
        onboard_seller(self.client, self.state.seller_id)

    @task
    def list_products(self):
        for _ in range(3):
            resp = self.client.post("/seller/products", json=product_data(), headers=self.headers, name="POST /seller/products")
            if resp.status_code == 201:
                product_id = resp.json()["product_id"]
                self.state.product_ids.append(product_id)
                CATALOGUE.append(product_id)

    @task
    def work_orders(self):
        resp = self.client.get("/seller/orders", headers=self.headers, name="GET /seller/orders")
        if resp.status_code != 200:
            return
        for order in resp.json()["orders"]:
            next_action = {"pending": random.choice(["confirmed", "confirmed", "cancelled"]), "confirmed": "shipped"}
            action = next_action.get(order["status"])
            if action is None:
                continue
            with self.client.patch(
                "/seller/orders",
                json={"order_id": order["order_id"], "action": action},
                headers=self.headers,
                catch_response=True,
                name="PATCH /seller/orders",
            ) as patch:
                if patch.status_code == 200:
                    self.state.handled_orders.add(order["order_id"])
                elif error_code(patch) == "invalid_transition":
                    patch.success()
                else:
                    patch.failure(f"Seller action failed: {patch.status_code} {extract_error_detail(patch)}")

    @task
    def restock(self):
        if self.state.product_ids:
            self.client.patch(
                "/seller/products",
                json={"product_id": random.choice(self.state.product_ids), "stock": random.randint(20, 60)},
                headers=self.headers,
                name="PATCH /seller/products",
            )


class BuyerUser(HttpUser):
    wait_time = between(1, 3)
    weight = 5
    tasks = [BuyerCheckoutJourney]


class SellerUser(HttpUser):
    wait_time = between(2, 5)
    weight = 1
    tasks = [SellerFulfillmentJourney]


class LastUnitRushUser(HttpUser):
    """Race for a single unit; run on its own to check the no-oversell property."""

    wait_time = between(0, 1)
    fixed_count = 0

    def on_start(self):
        self.buyer_id = principal("rush")
        self.headers = headers(self.buyer_id)
        self.client.post("/buyers", json=buyer_data(), headers=self.headers, name="POST /buyers")
        resp = self.client.post("/buyers/me/addresses", json=address_data(), headers=self.headers, name="POST /buyers/me/addresses")
        self.address_id = resp.json().get("address_id") if resp.status_code == 201 else None

    @task
    def rush(self):
        product_id = RUSH_PRODUCT.get("id")
        if not product_id or not self.address_id:
            return
        self.client.post("/cart", json={"product_id": product_id, "quantity": 1}, headers=self.headers, name="POST /cart")
        with self.client.post(
            "/orders",
            json={"address_id": self.address_id, "payment_method": "cod"},
            headers=self.headers,
            catch_response=True,
            name="POST /orders (rush)",
        ) as resp:
            if resp.status_code == 201:
                RUSH_PRODUCT["winners"] = RUSH_PRODUCT.get("winners", 0) + 1
            elif error_code(resp) in ("out_of_stock", "empty_cart"):
                resp.success()
            else:
                resp.failure(f"Rush checkout failed: {resp.status_code} {extract_error_detail(resp)}")


@events.test_start.add_listener
def _publish_rush_product(environment, **_kwargs):
    """Create the single-unit product the rush users compete for."""
    if not environment.host:
        return

    seller_id = principal("rush-seller")
    session = requests.Session()
    session.post(f"{environment.host}/seller/apply", json=seller_application(), headers=headers(seller_id), timeout=10)
    session.put(f"{environment.host}/admin/sellers/{seller_id}/approve", headers=headers(ADMIN_ID), timeout=10)
    resp = session.post(
        f"{environment.host}/seller/products", json=product_data(stock=1), headers=headers(seller_id), timeout=10
    )
    if resp.status_code == 201:
        RUSH_PRODUCT["id"] = resp.json()["product_id"]


@events.test_stop.add_listener
def _report_rush(**_kwargs):
    if "id" in RUSH_PRODUCT:
        winners = RUSH_PRODUCT.get("winners", 0)
        print(f"[LOADTEST] Last-unit rush: {winners} successful checkout(s) (expected at most 1)")
