"""
errors.py — Exception Types raised by the Order Service

Workflow rejections derive from OrderWorkflowError so callers can tell them apart
from collaborator failures, which the workflow lets through unchanged.
"""

from typing import List, Optional


class OrderWorkflowError(Exception):
    """Base class for failures decided by the order workflow itself."""

    error_code = "ORDER_WORKFLOW_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidOrderData(OrderWorkflowError):
    """Order input failed validation. No collaborator was called."""

    error_code = "INVALID_ORDER_DATA"

    def __init__(self, message: str = "Invalid order data"):
        super().__init__(message)


class ItemsUnavailable(OrderWorkflowError):
    """Inventory reported one or more items as unavailable."""

    error_code = "ITEMS_UNAVAILABLE"

    def __init__(self, unavailable_items: Optional[List[str]] = None):
        self.unavailable_items = list(unavailable_items or [])
        super().__init__(f"Items not available: {', '.join(self.unavailable_items)}")


class PaymentFailed(OrderWorkflowError):
    """The payment service declined the charge."""

    error_code = "PAYMENT_FAILED"

    def __init__(self, message: str = "Payment failed"):
        super().__init__(message)


class UserServiceError(Exception):
    """Base class for user profile lookup failures."""

    error_code = "USER_SERVICE_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UserIdRequired(UserServiceError):
    error_code = "USER_ID_REQUIRED"

    def __init__(self, message: str = "User ID is required"):
        super().__init__(message)


class UserNotFound(UserServiceError):
    error_code = "USER_NOT_FOUND"

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class UserFetchFailed(UserServiceError):
    error_code = "USER_FETCH_FAILED"

    def __init__(self, message: str = "Failed to fetch user profile"):
        super().__init__(message)
