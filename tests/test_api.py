"""REST API — tests for endpoints and error mapping with collaborator overrides."""

import httpx
import pytest
from fastapi.testclient import TestClient

from order_service.main import (
    app,
    get_email_service,
    get_inventory_service,
    get_payment_service,
    get_user_api_client,
)


@pytest.fixture
def client(payment_service, email_service, inventory_service):
    app.dependency_overrides[get_payment_service] = lambda: payment_service
    app.dependency_overrides[get_email_service] = lambda: email_service
    app.dependency_overrides[get_inventory_service] = lambda: inventory_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestOrdersEndpoint:

    def test_create_order(self, client, order_data):
        response = client.post("/v1/orders", json=order_data)

        assert response.status_code == 201
        assert response.json() == {"orderId": "ORD-123", "total": 51000, "status": "confirmed"}

    def test_invalid_order(self, client, order_data, inventory_service):
        order_data["items"] = []

        response = client.post("/v1/orders", json=order_data)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_ORDER_DATA"
        inventory_service.check_availability.assert_not_awaited()

    def test_malformed_item_uses_domain_error_shape(self, client, order_data, inventory_service):
        order_data["items"][0]["price"] = -5

        response = client.post("/v1/orders", json=order_data)

        assert response.status_code == 422
        assert response.json() == {"error": {"code": "INVALID_ORDER_DATA", "message": "Invalid order data"}}
        inventory_service.check_availability.assert_not_awaited()

    def test_items_unavailable(self, client, order_data, inventory_service):
        inventory_service.check_availability.return_value = {"available": False, "unavailableItems": ["Mouse"]}

        response = client.post("/v1/orders", json=order_data)

        assert response.status_code == 409
        assert response.json()["error"] == {"code": "ITEMS_UNAVAILABLE", "message": "Items not available: Mouse"}

    def test_payment_declined(self, client, order_data, payment_service):
        payment_service.charge.return_value = {"success": False}

        response = client.post("/v1/orders", json=order_data)

        assert response.status_code == 402
        assert response.json()["error"]["code"] == "PAYMENT_FAILED"

    def test_collaborator_failure(self, client, order_data, email_service):
        email_service.send.side_effect = RuntimeError("Email service unavailable")

        response = client.post("/v1/orders", json=order_data)

        assert response.status_code == 502
        assert response.json()["error"] == {
            "code": "COLLABORATOR_FAILED",
            "message": "Email service unavailable",
        }


class TestHelperEndpoints:

    def test_price_quote(self, client):
        response = client.post("/v1/pricing/quote", json={"price": 100, "discountCode": "save20"})

        assert response.status_code == 200
        assert response.json() == {"finalPrice": 80.0, "discountApplied": 20.0, "discountPercentage": 20.0}

    def test_price_quote_negative(self, client):
        response = client.post("/v1/pricing/quote", json={"price": -1})

        assert response.status_code == 422
        assert response.json()["error"]["message"] == "Price must be positive"

    def test_price_quote_string_price(self, client):
        response = client.post("/v1/pricing/quote", json={"price": "100", "discountCode": "SAVE10"})

        assert response.status_code == 422
        assert response.json()["error"] == {"code": "INVALID_PRICE", "message": "Price must be a number"}

    def test_price_quote_missing_price(self, client):
        response = client.post("/v1/pricing/quote", json={})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_registration_boolean_age(self, client):
        response = client.post("/v1/registrations/validate", json={
            "username": "juan_dc", "email": "juan@example.ph", "password": "Secur3!pass", "age": True,
        })

        assert response.json() == {"isValid": False, "errors": ["Age must be a number"]}

    def test_registration(self, client):
        response = client.post("/v1/registrations/validate", json={
            "username": "123user", "email": "invalid-email", "password": "weak", "age": 15,
        })

        assert response.status_code == 200
        assert response.json()["isValid"] is False
        assert len(response.json()["errors"]) == 7

    def test_phone(self, client):
        assert client.get("/v1/validators/phone", params={"number": "+639171234567"}).json() == {"valid": True}
        assert client.get("/v1/validators/phone", params={"number": "0917-123-4567"}).json() == {"valid": False}

    def test_email(self, client):
        assert client.get("/v1/validators/email", params={"address": "user@example.com"}).json() == {"valid": True}
        assert client.get("/v1/validators/email", params={"address": "user@"}).json() == {"valid": False}

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestUserProfileEndpoint:

    @pytest.fixture
    def user_api(self):
        def handler(request):
            if request.url.path == "/users/1":
                return httpx.Response(200, json={
                    "id": 1, "name": "Juan Dela Cruz", "email": "juan@example.com", "status": "active",
                })
            return httpx.Response(404)

        app.dependency_overrides[get_user_api_client] = lambda: httpx.AsyncClient(
            transport=httpx.MockTransport(handler), base_url="http://users.test")

    def test_profile(self, client, user_api):
        response = client.get("/v1/users/1/profile")

        assert response.status_code == 200
        assert response.json() == {"id": 1, "name": "Juan Dela Cruz", "email": "juan@example.com", "isActive": True}

    def test_profile_not_found(self, client, user_api):
        response = client.get("/v1/users/999/profile")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "USER_NOT_FOUND"
