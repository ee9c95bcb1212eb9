"""Shared test configuration and fixtures for the order service."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Keep test runs from writing order_processing.log or reaching real services
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("PAYMENT_SERVICE_URL", "http://payment.test")
os.environ.setdefault("INVENTORY_SERVICE_URL", "http://inventory.test")
os.environ.setdefault("USER_API_URL", "http://users.test")


@pytest.fixture
def order_data():
    return {
        "userId": 1,
        "userEmail": "user@example.com",
        "items": [
            {"productId": 1, "name": "Laptop", "price": 50000, "quantity": 1},
            {"productId": 2, "name": "Mouse", "price": 500, "quantity": 2},
        ],
    }


@pytest.fixture
def payment_service():
    service = MagicMock()
    service.charge = AsyncMock(return_value={"success": True, "orderId": "ORD-123"})
    return service


@pytest.fixture
def email_service():
    service = MagicMock()
    service.send = AsyncMock(return_value={"sent": True})
    return service


@pytest.fixture
def inventory_service():
    service = MagicMock()
    service.check_availability = AsyncMock(return_value={"available": True, "unavailableItems": []})
    service.deduct = AsyncMock(return_value={"success": True})
    return service
