"""
mock_email_service.py — Mock Implementation of the Email Delivery Worker

This module simulates the worker that delivers confirmation emails queued by the
order service (via RabbitMQ). Instead of sending mail it logs every message.

Communication Channels:
    - Input Queue: EMAIL_QUEUE (default 'notifications.email') ← Receives email messages
"""

import pika
import time
import json
import os
import logging

RABBITMQ_HOST = os.environ.get("RABBITMQ_HOST", "localhost")
RABBITMQ_USER = os.environ.get("RABBITMQ_USER", "shop")
RABBITMQ_PASSWORD = os.environ.get("RABBITMQ_PASSWORD", "shop")
EMAIL_QUEUE = os.environ.get("EMAIL_QUEUE", "notifications.email")

log = logging.getLogger(__name__)


def get_mq_connection():
    """
    Establishes and returns a connection to the RabbitMQ message broker.

    Raises:
        pika.exceptions.AMQPConnectionError: If the broker is unavailable.
    """
    credentials = pika.PlainCredentials(RABBITMQ_USER, RABBITMQ_PASSWORD)
    return pika.BlockingConnection(
        pika.ConnectionParameters(host=RABBITMQ_HOST, credentials=credentials)
    )


def on_email_received(ch, method, properties, body):
    """
    Callback triggered when a message arrives on the email queue.

    Behavior:
        - Logs recipient, subject and body of well-formed messages and acknowledges them.
        - Rejects malformed messages without requeueing (dead letter queue, if configured).
    """
    try:
        data = json.loads(body)
        log.info(f"[MAIL] To: {data['to']} | Subject: {data['subject']} | {data['body']}")
        ch.basic_ack(delivery_tag=method.delivery_tag)
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        log.error(f"[MAIL] Invalid email message {body!r}: {e}")
        ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)


def main():
    """
    Starts the mock email consumer loop.

    Reconnects every 5 seconds if the broker is unavailable and stops on Ctrl+C.
    """
    log.info("Mock email worker (MQ) starting...")
    while True:
        try:
            connection = get_mq_connection()
            channel = connection.channel()
            channel.queue_declare(queue=EMAIL_QUEUE, durable=True)

            log.info(f"[MAIL] Waiting for messages on '{EMAIL_QUEUE}'.")
            channel.basic_consume(queue=EMAIL_QUEUE, on_message_callback=on_email_received)
            channel.start_consuming()
        except pika.exceptions.AMQPConnectionError as e:
            log.warning(f"MQ connection failed, retrying in 5s... {e}")
            time.sleep(5)
        except KeyboardInterrupt:
            break


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    main()
