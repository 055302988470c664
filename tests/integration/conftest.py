import pytest
from rest_framework.test import APIClient

from helpers import ADMIN_ID, OTHER_ID, OWNER_ID, SAMPLE_ITEMS, identity_headers


@pytest.fixture(autouse=True)
def _isolated_order_service(monkeypatch, service):
    """Serve every request from the per-test ``service`` fixture.

    Keeps the in-memory store isolated between tests and replaces the
    HTTP identity directory with the mock from the root conftest.
    """
    monkeypatch.setattr("modules.orders.views.get_order_service", lambda: service)


def _client_for(user_id, roles):
    client = APIClient()
    client.credentials(**identity_headers(user_id, roles))
    return client


@pytest.fixture()
def owner_client():
    return _client_for(OWNER_ID, ["user"])


@pytest.fixture()
def other_client():
    return _client_for(OTHER_ID, ["user"])


@pytest.fixture()
def admin_client():
    return _client_for(ADMIN_ID, ["admin"])


@pytest.fixture()
def order_id(owner_client):
    """Id of an order created through the API by the owner."""
    response = owner_client.post("/v1/orders", {"items": SAMPLE_ITEMS}, format="json")
    assert response.status_code == 201
    return response.json()["data"]["id"]
