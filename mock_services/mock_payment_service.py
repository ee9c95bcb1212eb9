"""
mock_payment_service.py — Mock Implementation of the Payment Service (REST API)

This module provides a simulated Payment Service for local runs of the order workflow.
It exposes a simple FastAPI application that mimics real-world payment processing behavior.

Simulation Scenarios:
    • Successful payment processing
    • Declined payment (HTTP 402), userId starting with "decline_"
    • Timeout simulation, userId starting with "timeout_"

Endpoints:
    POST /v2/charges — Handles incoming charge requests.

Port:
    Default: 8001 (HTTP)
"""

from fastapi import FastAPI, Header, HTTPException
from pydantic import BaseModel
from typing import Union
import logging
import os
import time
import uuid

app = FastAPI(title="Mock Payment Service")
log = logging.getLogger(__name__)

TIMEOUT_DELAY_SECONDS = float(os.environ.get("MOCK_PAYMENT_TIMEOUT_DELAY", "10"))


class ChargeRequest(BaseModel):
    amount: float
    userId: Union[int, str]
    currency: str


@app.post("/v2/charges")
def create_charge(
        request: ChargeRequest,
        idempotency_key: str = Header(..., alias="Idempotency-Key")
):
    """
    Processes a payment charge request.

    Returns:
        dict: success flag, generated orderId and transactionId, UTC timestamp.

    Raises:
        HTTPException(402): If the payment is declined.
    """
    user = str(request.userId)
    log.info(f"[PS] Charge request from user {user}: {request.amount:.2f} {request.currency} "
             f"(Idempotency: {idempotency_key})")

    if user.startswith("decline_"):
        log.warning(f"[PS] Charge for user {user} declined.")
        raise HTTPException(
            status_code=402,
            detail={"errorCode": "payment_declined", "message": "Card declined."}
        )

    if user.startswith("timeout_"):
        log.info(f"[PS] Simulating timeout for user {user}...")
        time.sleep(TIMEOUT_DELAY_SECONDS)

    order_id = f"ORD-{uuid.uuid4().hex[:8].upper()}"
    log.info(f"[PS] Charge for user {user} succeeded. Order {order_id}.")
    return {
        "success": True,
        "orderId": order_id,
        "transactionId": f"tr_{uuid.uuid4()}",
        "createdAt": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
    }


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8001)
