"""Integration tests for the response envelope on errors."""

import pytest

from helpers import identity_headers

pytestmark = pytest.mark.integration


def _assert_envelope(body, code):
    assert set(body) == {"success", "data", "error"}
    assert body["success"] is False
    assert body["data"] is None
    assert body["error"]["code"] == code
    assert isinstance(body["error"]["message"], str)


class TestEnvelopeErrors:
    def test_auth_error_has_envelope(self, api_client):
        response = api_client.get("/v1/orders")
        assert response.status_code == 401
        _assert_envelope(response.json(), "UNAUTHORIZED")

    def test_malformed_roles_do_not_grant_admin(self, api_client, order_id):
        api_client.credentials(**{**identity_headers("intruder"), "HTTP_X_USER_ROLES": "admin"})
        response = api_client.get(f"/v1/orders/{order_id}")
        assert response.status_code == 403
        _assert_envelope(response.json(), "FORBIDDEN")

    def test_unknown_route_returns_not_found(self, client):
        response = client.get("/v1/does-not-exist")
        assert response.status_code == 404
        body = response.json()
        _assert_envelope(body, "NOT_FOUND")
        assert body["error"]["message"] == "Route not found"

    def test_unsupported_method_returns_not_found_code(self, owner_client, order_id):
        response = owner_client.delete(f"/v1/orders/{order_id}")
        assert response.status_code == 405
        _assert_envelope(response.json(), "NOT_FOUND")

    def test_unexpected_error_returns_internal_error(self, owner_client, service, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("store exploded")

        monkeypatch.setattr(service, "list_orders", explode)
        response = owner_client.get("/v1/orders")
        assert response.status_code == 500
        body = response.json()
        _assert_envelope(body, "INTERNAL_ERROR")
        assert "exploded" not in body["error"]["message"]
