"""Integration tests for seller, admin and fulfillment endpoints."""

import pytest

SELLER = {"X-User-Id": "seller-001"}
ADMIN = {"X-User-Id": "admin"}

APPLICATION = {
    "shop_name": "Banaras Looms",
    "gst_number": "09AAACB1234C1Z5",
    "address": {
        "street": "4 Weavers Lane",
        "city": "Varanasi",
        "state": "Uttar Pradesh",
        "zip_code": "221001",
    },
    "documents": {
        "pan_card_front": "https://blobs.example.com/pf.png",
        "pan_card_back": "https://blobs.example.com/pb.png",
        "aadhar_card_front": "https://blobs.example.com/af.png",
        "aadhar_card_back": "https://blobs.example.com/ab.png",
    },
}


@pytest.fixture()
def approved_seller(client):
    assert client.post("/seller/apply", json=APPLICATION, headers=SELLER).status_code == 201
    assert client.put("/admin/sellers/seller-001/approve", headers=ADMIN).status_code == 200
    return SELLER


@pytest.fixture()
def listed_product(client, approved_seller):
    response = client.post(
        "/seller/products",
        json={"name": "Silk Saree", "price": 100.0, "stock": 5},
        headers=approved_seller,
    )
    assert response.status_code == 201
    return response.json()["product_id"]


@pytest.fixture()
def placed_order(client, api_buyer, listed_product):
    headers, address_id = api_buyer
    client.post("/cart", json={"product_id": listed_product, "quantity": 3}, headers=headers)
    response = client.post("/orders", json={"address_id": address_id}, headers=headers)
    return response.json()["order"]["id"]


class TestSellerOnboarding:
    def test_unapproved_seller_cannot_list(self, client):
        client.post("/seller/apply", json=APPLICATION, headers=SELLER)
        response = client.post("/seller/products", json={"name": "Saree", "price": 10.0, "stock": 1}, headers=SELLER)
        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Not an approved seller"

    def test_only_admin_approves(self, client):
        client.post("/seller/apply", json=APPLICATION, headers=SELLER)
        response = client.put("/admin/sellers/seller-001/approve", headers=SELLER)
        assert response.status_code == 403

    def test_non_positive_price_rejected(self, client, approved_seller):
        response = client.post(
            "/seller/products", json={"name": "Saree", "price": 0, "stock": 1}, headers=approved_seller
        )
        assert response.status_code == 400


class TestSellerProducts:
    def test_list_and_overwrite_stock(self, client, approved_seller, listed_product):
        response = client.patch(
            "/seller/products", json={"product_id": listed_product, "stock": 12}, headers=approved_seller
        )
        assert response.status_code == 200

        products = client.get("/seller/products", headers=approved_seller).json()["products"]
        assert products[0]["stock"] == 12
        assert products[0]["available"] == 12


class TestSellerOrders:
    def test_grouped_listing(self, client, approved_seller, placed_order):
        orders = client.get("/seller/orders", headers=approved_seller).json()["orders"]
        assert len(orders) == 1
        assert orders[0]["order_id"] == placed_order
        assert orders[0]["buyer"]["name"] == "Asha Verma"
        assert orders[0]["items"][0]["quantity"] == 3

    def test_accept_then_double_accept(self, client, approved_seller, placed_order):
        response = client.patch(
            "/seller/orders", json={"order_id": placed_order, "action": "confirmed"}, headers=approved_seller
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Order accepted successfully"
        assert response.json()["order"]["status"] == "confirmed"

        response = client.patch(
            "/seller/orders", json={"order_id": placed_order, "action": "confirmed"}, headers=approved_seller
        )
        assert response.status_code == 400
        assert response.json()["error"] == {
            "code": "invalid_transition",
            "message": "Cannot accept an order that is already confirmed",
        }

    def test_reject_restores_available_stock(self, client, approved_seller, placed_order):
        before = client.get("/seller/products", headers=approved_seller).json()["products"][0]["available"]

        response = client.patch(
            "/seller/orders", json={"order_id": placed_order, "action": "cancelled"}, headers=approved_seller
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Order rejected and stock restored"
        after = client.get("/seller/products", headers=approved_seller).json()["products"][0]["available"]
        assert after == before + 3

    def test_foreign_seller_forbidden(self, client, approved_seller, placed_order):
        other = {"X-User-Id": "seller-002"}
        client.post("/seller/apply", json=APPLICATION, headers=other)
        client.put("/admin/sellers/seller-002/approve", headers=ADMIN)

        response = client.patch("/seller/orders", json={"order_id": placed_order, "action": "confirmed"}, headers=other)
        assert response.status_code == 403
        assert response.json()["error"]["message"] == "No items in this order belong to you"
