"""
mock_inventory_service.py — Mock Implementation of the Inventory Service (REST API)

This module provides a simulated Inventory Service for local runs of the order workflow.

The mock simulates common inventory-related scenarios:
    • All items available
    • Out-of-stock items (name contains "OUT-OF-STOCK")
    • Stock deduction after payment

Endpoints:
    POST /v1/inventory/availability
    POST /v1/inventory/deductions

Port:
    Default: 8002 (HTTP)
"""

from fastapi import FastAPI
from pydantic import BaseModel
from typing import List, Union
import logging
import time

app = FastAPI(title="Mock Inventory Service")
log = logging.getLogger(__name__)


class Item(BaseModel):
    productId: Union[int, str]
    name: str
    quantity: int


class ItemsRequest(BaseModel):
    items: List[Item]


@app.post("/v1/inventory/availability")
def check_availability(request: ItemsRequest):
    unavailable = [item.name for item in request.items if "OUT-OF-STOCK" in item.name]
    if unavailable:
        log.warning(f"[IS] Not in stock: {unavailable}")
    else:
        log.info(f"[IS] All {len(request.items)} item(s) available.")
    return {"available": not unavailable, "unavailableItems": unavailable}


@app.post("/v1/inventory/deductions")
def deduct(request: ItemsRequest):
    deduction_id = f"ded-{int(time.time())}"
    log.info(f"[IS] Deducted {sum(item.quantity for item in request.items)} unit(s). ID: {deduction_id}")
    return {"success": True, "deductionId": deduction_id}


if __name__ == '__main__':
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8002)
