"""Integration tests for buyer and address endpoints."""


class TestAuthentication:
    def test_missing_principal(self, client):
        response = client.get("/buyers/me/addresses")
        assert response.status_code == 401
        assert response.json() == {"error": {"code": "unauthenticated", "message": "Authentication required"}}


class TestRegisterBuyer:
    def test_register(self, client):
        response = client.post(
            "/buyers",
            json={"email": "asha@example.com", "first_name": "Asha", "last_name": "Verma"},
            headers={"X-User-Id": "buyer-001"},
        )
        assert response.status_code == 201
        assert response.json() == {"buyer_id": "buyer-001"}

    def test_unknown_field_rejected(self, client):
        response = client.post(
            "/buyers",
            json={"email": "asha@example.com", "first_name": "Asha", "last_name": "Verma", "role": "admin"},
            headers={"X-User-Id": "buyer-001"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "validation_failed"


class TestAddresses:
    def test_list_default_first(self, client, api_buyer):
        headers, first = api_buyer
        response = client.post(
            "/buyers/me/addresses",
            json={
                "street": "7 Park Street",
                "city": "Kolkata",
                "zip_code": "700016",
                "country": "India",
                "is_default": True,
            },
            headers=headers,
        )
        second = response.json()["address_id"]

        addresses = client.get("/buyers/me/addresses", headers=headers).json()["addresses"]
        assert [a["id"] for a in addresses] == [second, first]
        assert [a["is_default"] for a in addresses] == [True, False]

    def test_update_and_remove(self, client, api_buyer):
        headers, address_id = api_buyer
        response = client.put(f"/buyers/me/addresses/{address_id}", json={"city": "Mysuru"}, headers=headers)
        assert response.status_code == 200

        addresses = client.get("/buyers/me/addresses", headers=headers).json()["addresses"]
        assert addresses[0]["city"] == "Mysuru"

        response = client.delete(f"/buyers/me/addresses/{address_id}", headers=headers)
        assert response.status_code == 200
        assert client.get("/buyers/me/addresses", headers=headers).json()["addresses"] == []

    def test_unknown_address(self, client, api_buyer):
        headers, _ = api_buyer
        response = client.delete("/buyers/me/addresses/addr-404", headers=headers)
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "invalid_address"

    def test_unregistered_buyer(self, client):
        response = client.get("/buyers/me/addresses", headers={"X-User-Id": "nobody"})
        assert response.status_code == 404


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok", "domain": "storefront"}
