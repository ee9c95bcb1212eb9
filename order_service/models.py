"""
models.py — Data Models for Order Processing and Validation

This module defines the data structures exchanged between the order workflow,
its collaborators (payment, inventory, email) and the REST API.
It uses Pydantic models to ensure type safety and automatic validation of incoming data.

Field names are camelCase because they double as the JSON wire format.

Models:
    - LineItem: A single product entry in an order.
    - OrderRequest: The order payload handed to the workflow.
    - AvailabilityResult / ChargeRequest / ChargeResult / EmailMessage: Collaborator payloads.
    - OrderConfirmation: The workflow result.
    - DiscountResult, RegistrationResult, UserProfile: Results of the helper functions.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Any, List, Literal, Optional, Union

Identifier = Union[int, str]


class LineItem(BaseModel):
    """
    Represents a single product item in an order.

    Attributes:
        productId (int | str): Product identifier.
        name (str): Display name, used in availability errors.
        price (float): Unit price in PHP. Must not be negative.
        quantity (int): Number of units. Must be greater than zero.
    """
    productId: Identifier
    name: str
    price: float = Field(..., ge=0)
    quantity: int = Field(..., gt=0)


class OrderRequest(BaseModel):
    """
    Represents an order submitted to the workflow.

    userId and items are deliberately lenient here; the workflow itself rejects
    a falsy userId or an empty item list with InvalidOrderData.

    Attributes:
        userId (int | str | None): Identifier of the ordering user.
        userEmail (str): Address the confirmation email goes to.
        items (List[LineItem]): Ordered line items.
    """
    userId: Optional[Identifier] = None
    userEmail: str = ""
    items: List[LineItem] = Field(default_factory=list)


class AvailabilityResult(BaseModel):
    available: bool
    unavailableItems: List[str] = Field(default_factory=list)


class ChargeRequest(BaseModel):
    """Payment charge request. Currency is always Philippine peso."""
    amount: float
    userId: Identifier
    currency: Literal["PHP"] = "PHP"


class ChargeResult(BaseModel):
    success: bool
    orderId: Optional[str] = None

    @model_validator(mode="after")
    def require_order_id_on_success(self):
        if self.success and not self.orderId:
            raise ValueError("orderId is required for a successful charge")
        return self


class EmailMessage(BaseModel):
    to: str
    subject: str
    body: str


class OrderConfirmation(BaseModel):
    orderId: str
    total: float
    status: Literal["confirmed"] = "confirmed"


class DiscountResult(BaseModel):
    """
    Result of a discount price calculation.

    discountApplied and discountPercentage both hold the percentage that was
    actually applied (0 when the code is unknown or the price is too low).
    """
    finalPrice: float
    discountApplied: float
    discountPercentage: float


class RegistrationResult(BaseModel):
    isValid: bool
    errors: List[str] = Field(default_factory=list)


class UserProfile(BaseModel):
    id: Identifier
    name: str
    email: str
    isActive: bool


class PriceQuoteRequest(BaseModel):
    """Price is left untyped so calculate_final_price decides what counts as a number."""
    price: Any
    discountCode: Optional[str] = ""


class RegistrationRequest(BaseModel):
    """Registration form payload. Every field is optional; missing values are reported by the validators."""
    username: Any = None
    email: Any = None
    password: Any = None
    age: Any = None
