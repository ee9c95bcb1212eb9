"""
main.py — FastAPI Entry Point for the Order Service

This module provides the REST API for the shop's order service.

Responsibilities:
    • Accept new orders and run the order workflow (Inventory → Payment → Inventory → Email)
    • Expose the pricing and validation helpers
    • Look up user profiles
    • Map workflow and collaborator failures to HTTP responses
    • Provide system health information
"""

from typing import AsyncIterator

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .clients import EmailClient, InventoryClient, PaymentClient, create_user_api_client
from .errors import (
    InvalidOrderData,
    ItemsUnavailable,
    OrderWorkflowError,
    PaymentFailed,
    UserFetchFailed,
    UserIdRequired,
    UserNotFound,
    UserServiceError,
)
from .logging_config import get_logger, setup_logging
from .models import (
    DiscountResult,
    OrderConfirmation,
    OrderRequest,
    PriceQuoteRequest,
    RegistrationRequest,
    RegistrationResult,
    UserProfile,
)
from .pricing import calculate_final_price
from .users import fetch_user_profile
from .validators import is_valid_email, validate_phone_number, validate_registration
from .workflow import create_order

# Initialization
setup_logging()
log = get_logger(__name__)
app = FastAPI(title="Shop Order Service")

ERROR_STATUS = {
    InvalidOrderData: 422,
    ItemsUnavailable: 409,
    PaymentFailed: 402,
    UserIdRequired: 422,
    UserNotFound: 404,
    UserFetchFailed: 502,
}


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"code": code, "message": message}})


@app.exception_handler(OrderWorkflowError)
async def order_workflow_error_handler(request: Request, exc: OrderWorkflowError):
    log.warning(f"Order rejected on {request.url.path}: {exc.message}")
    return _error_response(ERROR_STATUS.get(type(exc), 400), exc.error_code, exc.message)


@app.exception_handler(UserServiceError)
async def user_service_error_handler(request: Request, exc: UserServiceError):
    log.warning(f"User lookup failed on {request.url.path}: {exc.message}")
    return _error_response(ERROR_STATUS.get(type(exc), 502), exc.error_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    log.warning(f"Validation error on {request.url.path}: {exc.errors()}")
    if request.url.path == "/v1/orders":
        error = InvalidOrderData()
        return _error_response(422, error.error_code, error.message)
    return _error_response(422, "INVALID_REQUEST", "Request body failed validation")


# Collaborator dependencies (overridable in tests)
async def get_payment_service() -> AsyncIterator[PaymentClient]:
    client = PaymentClient()
    try:
        yield client
    finally:
        await client.aclose()


async def get_inventory_service() -> AsyncIterator[InventoryClient]:
    client = InventoryClient()
    try:
        yield client
    finally:
        await client.aclose()


def get_email_service():
    client = EmailClient()
    try:
        yield client
    finally:
        client.close()


async def get_user_api_client() -> AsyncIterator[httpx.AsyncClient]:
    client = create_user_api_client()
    try:
        yield client
    finally:
        await client.aclose()


# API Endpoint: create order
@app.post("/v1/orders", status_code=201, response_model=OrderConfirmation)
async def submit_order(
        order: OrderRequest,
        payment=Depends(get_payment_service),
        email=Depends(get_email_service),
        inventory=Depends(get_inventory_service)
):
    """
    Receives a new order and runs the order workflow to completion.

    Returns:
        OrderConfirmation: orderId, total and status "confirmed".

    Errors:
        422 invalid order data, 409 items unavailable, 402 payment declined,
        502 if a collaborator fails.
    """
    log.info(f"[User: {order.userId}] New order received via API.")
    try:
        return await create_order(order, payment, email, inventory)
    except OrderWorkflowError:
        raise
    except Exception as e:
        # Collaborator failure; payment or deduction may already be committed
        log.error(f"[User: {order.userId}] Order failed in a collaborator: {e}", exc_info=True)
        return _error_response(502, "COLLABORATOR_FAILED", str(e))


@app.post("/v1/pricing/quote", response_model=DiscountResult)
def quote_price(request: PriceQuoteRequest):
    try:
        return calculate_final_price(request.price, request.discountCode or "")
    except (TypeError, ValueError) as e:
        return _error_response(422, "INVALID_PRICE", str(e))


@app.post("/v1/registrations/validate", response_model=RegistrationResult)
def validate_registration_endpoint(request: RegistrationRequest):
    return validate_registration(request.model_dump())


@app.get("/v1/validators/phone")
def check_phone(number: str = ""):
    return {"valid": validate_phone_number(number)}


@app.get("/v1/validators/email")
def check_email(address: str = ""):
    return {"valid": is_valid_email(address)}


@app.get("/v1/users/{user_id}/profile", response_model=UserProfile)
async def get_user_profile(user_id: str, api_client: httpx.AsyncClient = Depends(get_user_api_client)):
    return await fetch_user_profile(user_id, api_client)


# Health Check Endpoint
@app.get("/health")
def health_check():
    """
    Simple health check endpoint for monitoring systems and container orchestrators.
    """
    return {"status": "ok"}
