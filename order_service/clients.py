"""
This module provides communication clients for the collaborators of the order workflow:
- Payment Service (REST API)
- Inventory Service (REST API)
- Email notifications (RabbitMQ)
Each class encapsulates its protocol logic, error handling, and connection management,
and satisfies the matching service interface in workflow.py.
"""

import asyncio
import json
import logging
import os
import uuid
from typing import List, Optional

import httpx
import pika

from .models import AvailabilityResult, ChargeRequest, ChargeResult, EmailMessage, LineItem

# Service addresses
PAYMENT_SERVICE_URL = os.environ.get("PAYMENT_SERVICE_URL", "http://payment_service:8001")
INVENTORY_SERVICE_URL = os.environ.get("INVENTORY_SERVICE_URL", "http://inventory_service:8002")
USER_API_URL = os.environ.get("USER_API_URL", "http://user_service:8003")
RABBITMQ_HOST = os.environ.get("RABBITMQ_HOST", "localhost")
RABBITMQ_USER = os.environ.get("RABBITMQ_USER", "shop")
RABBITMQ_PASSWORD = os.environ.get("RABBITMQ_PASSWORD", "shop")
EMAIL_QUEUE = os.environ.get("EMAIL_QUEUE", "notifications.email")

log = logging.getLogger(__name__)


def _default_timeout() -> httpx.Timeout:
    return httpx.Timeout(5.0, read=8.0)


def _items_payload(items: List[LineItem]) -> list:
    return [item.model_dump() for item in items]


# --- Payment Client (REST) ---
class PaymentClient:
    """
    Client for the Payment Service (REST API).
    A declined charge (HTTP 402) is reported as an unsuccessful ChargeResult;
    every other error is raised to the workflow.
    """
    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client or httpx.AsyncClient(base_url=PAYMENT_SERVICE_URL, timeout=_default_timeout())

    async def aclose(self):
        await self.client.aclose()

    async def charge(self, request: ChargeRequest) -> ChargeResult:
        """
        Creates a new charge via the Payment Service REST API.
        Args:
            request (ChargeRequest): Amount, user and currency to charge.
        Returns:
            ChargeResult: success with the orderId, or success=False if the charge was declined.
        Raises:
            httpx.TimeoutException: If the service does not respond within the timeout.
            httpx.HTTPStatusError: If the service returns an error status other than 402.
        """
        log_prefix = f"[User: {request.userId}]"
        headers = {"Idempotency-Key": str(uuid.uuid4())}

        try:
            response = await self.client.post("/v2/charges", json=request.model_dump(), headers=headers)
            response.raise_for_status()
            return ChargeResult.model_validate(response.json())
        except httpx.TimeoutException:
            log.error(f"{log_prefix} Payment Service timeout. Charge status unknown.")
            raise
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 402:
                log.warning(f"{log_prefix} Payment declined: {e.response.text}")
                return ChargeResult(success=False)
            log.error(f"{log_prefix} HTTP error from Payment Service: {e}")
            raise


# --- Inventory Client (REST) ---
class InventoryClient:
    """
    Client for the Inventory Service (REST API).
    Handles availability checks and stock deduction.
    """
    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client or httpx.AsyncClient(base_url=INVENTORY_SERVICE_URL, timeout=_default_timeout())

    async def aclose(self):
        await self.client.aclose()

    async def check_availability(self, items: List[LineItem]) -> AvailabilityResult:
        """
        Asks the Inventory Service whether all items are in stock.
        Raises:
            httpx.HTTPError: If the request fails or times out.
        """
        try:
            response = await self.client.post("/v1/inventory/availability", json={"items": _items_payload(items)})
            response.raise_for_status()
            return AvailabilityResult.model_validate(response.json())
        except httpx.HTTPError as e:
            log.error(f"Availability check at Inventory Service failed: {e}")
            raise

    async def deduct(self, items: List[LineItem]) -> dict:
        """
        Deducts the ordered quantities from stock.
        Raises:
            httpx.HTTPError: If the request fails or times out.
        """
        try:
            response = await self.client.post("/v1/inventory/deductions", json={"items": _items_payload(items)})
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            # Payment has already been taken at this point
            log.critical(f"Inventory deduction failed after payment: {e}. Manual action required!")
            raise


# --- Email Client (MQ) ---
class EmailClient:
    """
    Publishes confirmation emails to the email queue (RabbitMQ).
    The mail itself is delivered by the consumer of that queue.
    """
    def __init__(self, connection_factory=None, queue: str = EMAIL_QUEUE):
        self.connection_factory = connection_factory or _connect_rabbitmq
        self.queue = queue
        self.connection = None
        self.channel = None

    def _connect(self):
        """
        Opens the RabbitMQ connection and declares the email queue.
        Raises:
            pika.exceptions.AMQPConnectionError: If the connection fails.
        """
        try:
            self.connection = self.connection_factory()
            self.channel = self.connection.channel()
            self.channel.queue_declare(queue=self.queue, durable=True)
            log.info("Email client connected to RabbitMQ.")
        except pika.exceptions.AMQPConnectionError as e:
            log.critical(f"Cannot connect to RabbitMQ (email queue): {e}")
            raise

    def _publish(self, message: EmailMessage):
        if not self.connection or self.connection.is_closed:
            self._connect()

        self.channel.basic_publish(
            exchange='',
            routing_key=self.queue,
            body=json.dumps(message.model_dump()),
            properties=pika.BasicProperties(delivery_mode=2)  # persistent
        )

    async def send(self, message: EmailMessage) -> dict:
        """
        Queues an email for delivery.
        Args:
            message (EmailMessage): Recipient, subject and body.
        Returns:
            dict: {"queued": True} once the message is published.
        Raises:
            pika.exceptions.AMQPError: If publishing fails.
        """
        try:
            # pika's BlockingConnection must not run on the event loop
            await asyncio.to_thread(self._publish, message)
            log.info(f"Email '{message.subject}' to {message.to} queued on '{self.queue}'.")
            return {"queued": True}
        except pika.exceptions.AMQPError as e:
            log.error(f"Failed to queue email to {message.to}: {e}")
            raise

    def close(self):
        if self.connection and self.connection.is_open:
            self.connection.close()


def _connect_rabbitmq():
    credentials = pika.PlainCredentials(RABBITMQ_USER, RABBITMQ_PASSWORD)
    return pika.BlockingConnection(
        pika.ConnectionParameters(host=RABBITMQ_HOST, credentials=credentials, heartbeat=60)
    )


def create_user_api_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=USER_API_URL, timeout=_default_timeout())
