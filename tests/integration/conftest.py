import pytest
from fastapi.testclient import TestClient

from storefront.api import create_app


@pytest.fixture()
def client():
    return TestClient(create_app())


@pytest.fixture()
def api_buyer(client):
    """Register a buyer with one address over HTTP; returns (headers, address_id)."""
    headers = {"X-User-Id": "buyer-001"}
    response = client.post(
        "/buyers",
        json={"email": "asha@example.com", "first_name": "Asha", "last_name": "Verma", "phone": "9800000001"},
        headers=headers,
    )
    assert response.status_code == 201
    response = client.post(
        "/buyers/me/addresses",
        json={"street": "12 MG Road", "city": "Bengaluru", "zip_code": "560001", "country": "India"},
        headers=headers,
    )
    assert response.status_code == 201
    return headers, response.json()["address_id"]
