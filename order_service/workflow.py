"""
workflow.py — Core Orchestration Logic for Order Creation

This module contains the order creation workflow. It coordinates the injected
collaborators (Inventory, Payment, Email) in a fixed sequence.

Workflow Overview:
1. Validate the order input
2. Compute the order total
3. Check availability via the Inventory Service
4. Charge the order total via the Payment Service
5. Deduct the items via the Inventory Service
6. Send the confirmation via the Email Service

There is no compensation: if the email step fails, the charge and the inventory
deduction stay committed and the failure is still raised to the caller.
"""

import logging
from typing import Any, List, Mapping, Protocol, Union

from pydantic import ValidationError

from .errors import InvalidOrderData, ItemsUnavailable, PaymentFailed
from .models import (
    AvailabilityResult,
    ChargeRequest,
    ChargeResult,
    EmailMessage,
    LineItem,
    OrderConfirmation,
    OrderRequest,
)

log = logging.getLogger(__name__)

CONFIRMATION_SUBJECT = "Order Confirmation"


class InventoryService(Protocol):
    async def check_availability(self, items: List[LineItem]) -> AvailabilityResult: ...

    async def deduct(self, items: List[LineItem]) -> Any: ...


class PaymentService(Protocol):
    async def charge(self, request: ChargeRequest) -> ChargeResult: ...


class EmailService(Protocol):
    async def send(self, message: EmailMessage) -> Any: ...


def _parse_order(order: Union[OrderRequest, Mapping[str, Any]]) -> OrderRequest:
    """Coerces the input into an OrderRequest, raising InvalidOrderData for anything unusable."""
    if isinstance(order, OrderRequest):
        parsed = order
    else:
        if not isinstance(order, Mapping) or not order.get("userId") or not order.get("items"):
            raise InvalidOrderData()
        try:
            parsed = OrderRequest.model_validate(order)
        except ValidationError as e:
            raise InvalidOrderData() from e

    if not parsed.userId or not parsed.items:
        raise InvalidOrderData()
    return parsed


def calculate_order_total(items: List[LineItem]) -> float:
    return sum(item.price * item.quantity for item in items)


async def create_order(
        order: Union[OrderRequest, Mapping[str, Any]],
        payment: PaymentService,
        email: EmailService,
        inventory: InventoryService
) -> OrderConfirmation:
    """
    Executes the complete order creation workflow for a single order.

    Each collaborator call is awaited before the next step starts. Every step must
    succeed for the next one to run; nothing is retried.

    Args:
        order (OrderRequest | Mapping): Order details with keys
            userId, userEmail and items (productId, name, price, quantity).
        payment (PaymentService): Charges the order total.
        email (EmailService): Sends the confirmation email.
        inventory (InventoryService): Checks availability and deducts stock.

    Returns:
        OrderConfirmation: orderId from the payment service, the total and status "confirmed".

    Raises:
        InvalidOrderData: If userId is missing or items is empty. No collaborator is called.
        ItemsUnavailable: If the inventory reports unavailable items.
        PaymentFailed: If the payment service declines the charge.
        Exception: Any exception raised by a collaborator, passed through unchanged.
        pydantic.ValidationError: If a collaborator result is malformed, for example a
            successful charge without an orderId. No later step runs.
    """
    parsed = _parse_order(order)
    log_prefix = f"[User: {parsed.userId}]"
    items = parsed.items

    total = calculate_order_total(items)
    log.info(f"{log_prefix} Starting order with {len(items)} item(s), total {total:.2f} PHP.")

    # --- 1. Inventory check ---
    log.info(f"{log_prefix} Step 1: Checking availability (Inventory)...")
    availability = AvailabilityResult.model_validate(await inventory.check_availability(items))
    if not availability.available:
        log.warning(f"{log_prefix} Rejected: items not available {availability.unavailableItems}.")
        raise ItemsUnavailable(availability.unavailableItems)

    # --- 2. Payment ---
    log.info(f"{log_prefix} Step 2: Charging payment (Payment)...")
    charge_request = ChargeRequest(amount=total, userId=parsed.userId, currency="PHP")
    charge = ChargeResult.model_validate(await payment.charge(charge_request))
    if not charge.success:
        log.warning(f"{log_prefix} Rejected: payment declined.")
        raise PaymentFailed()

    log_prefix = f"[Order: {charge.orderId}]"
    log.info(f"{log_prefix} Payment successful.")

    # --- 3. Inventory deduction ---
    log.info(f"{log_prefix} Step 3: Deducting inventory (Inventory)...")
    await inventory.deduct(items)

    # --- 4. Confirmation email ---
    log.info(f"{log_prefix} Step 4: Sending confirmation to {parsed.userEmail} (Email)...")
    await email.send(EmailMessage(
        to=parsed.userEmail,
        subject=CONFIRMATION_SUBJECT,
        body=f"Your order #{charge.orderId} has been confirmed!"
    ))

    log.info(f"{log_prefix} Order confirmed.")
    return OrderConfirmation(orderId=charge.orderId, total=total, status="confirmed")
