# -*- coding: utf-8 -*-
"""RabbitMQ connection, listener and publishing utilities."""

from .types import (
    MessageType,
    RabbitMQConfig,
)
from typing import (
    Awaitable,
    Callable,
    Dict,
    Optional,
)
import aio_pika
import asyncio
import json
import logging
import ssl

logger = logging.getLogger(__name__)

QueueHandler = Callable[[MessageType], Awaitable[None]]

_QUEUE_HANDLERS: Dict[str, QueueHandler] = {}

connection: Optional[aio_pika.abc.AbstractRobustConnection] = None
channel: Optional[aio_pika.abc.AbstractChannel] = None


def register_queue_handler(queue: str) -> Callable[[QueueHandler], QueueHandler]:
    """Register the coroutine that consumes the messages of ``queue``."""
    def decorator(func: QueueHandler) -> QueueHandler:
        _QUEUE_HANDLERS[queue] = func
        return func
    return decorator


def get_queue_handler(queue: str) -> Optional[QueueHandler]:
    return _QUEUE_HANDLERS.get(queue)


def _ssl_context(config: RabbitMQConfig) -> Optional[ssl.SSLContext]:
    if not config["use_tls"]:
        return None
    ca_cert = config["ca_cert"]
    context = ssl.create_default_context(cafile=str(ca_cert) if ca_cert is not None else None)
    if config["client_cert"] is not None and config["client_key"] is not None:
        context.load_cert_chain(certfile=str(config["client_cert"]), keyfile=str(config["client_key"]))
    return context


async def init_rabbitmq(config: RabbitMQConfig, retries: int = 10, delay: int = 3) -> Optional[aio_pika.abc.AbstractRobustConnection]:
    """Initialize RabbitMQ connection and channel with retries."""
    global connection, channel
    attempt = 1

    while attempt <= retries:
        try:
            logger.info(
                "[LOG:RABBITMQ] - Connecting (attempt %s/%s): %s:%s",
                attempt, retries, config["host"], config["port"],
            )
            connection = await aio_pika.connect_robust(
                host=config["host"],
                port=config["port"],
                login=config["username"],
                password=config["password"],
                virtualhost=config["virtual_host"],
                ssl=config["use_tls"],
                ssl_context=_ssl_context(config),
            )
            channel = await connection.channel()
            logger.info("[LOG:RABBITMQ] - Connected")
            return connection
        except Exception as e:
            logger.error("[LOG:RABBITMQ] - Error connecting: Reason=%s", e)
            if attempt == retries:
                logger.error("[LOG:RABBITMQ] - Failed to connect after %s attempts", retries)
                return None
            attempt += 1
            await asyncio.sleep(delay)
    return None


async def close_rabbitmq() -> None:
    """Close RabbitMQ connection gracefully."""
    global connection, channel
    try:
        if channel is not None and not channel.is_closed:
            await channel.close()
        if connection is not None and not connection.is_closed:
            await connection.close()
        logger.info("[LOG:RABBITMQ] - Connection closed")
    except Exception as e:
        logger.error("[LOG:RABBITMQ] - Error closing connection: Reason=%s", e)
    finally:
        connection = None
        channel = None


def is_rabbitmq_healthy() -> bool:
    return connection is not None and not connection.is_closed


async def publish_message(queue: str, message: MessageType) -> None:
    """Publish a JSON message to ``queue`` through the default exchange."""
    if channel is None or channel.is_closed:
        logger.warning("[LOG:RABBITMQ] - Channel not initialized, message to %s skipped", queue)
        return
    try:
        await channel.default_exchange.publish(
            aio_pika.Message(
                body=json.dumps(message).encode(),
                content_type="application/json",
                delivery_mode=aio_pika.DeliveryMode.PERSISTENT,
            ),
            routing_key=queue,
        )
        logger.debug("[LOG:RABBITMQ] - Published message to %s", queue)
    except Exception as e:
        logger.error("[LOG:RABBITMQ] - Failed to publish message to %s: Reason=%s", queue, e, exc_info=True)


async def handle_message(queue: str, message: aio_pika.abc.AbstractIncomingMessage) -> None:
    """Decode one incoming message and hand it to the handler registered for ``queue``."""
    async with message.process(requeue=False):
        handler = get_queue_handler(queue)
        if handler is None:
            logger.warning("[LOG:RABBITMQ] - No handler registered for queue %s", queue)
            return
        try:
            data = json.loads(message.body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("[LOG:RABBITMQ] - Undecodable message on %s: Reason=%s", queue, e)
            return
        if not isinstance(data, dict):
            logger.error("[LOG:RABBITMQ] - Message on %s is not a JSON object", queue)
            return
        try:
            await handler(data)
        except Exception as e:
            logger.error("[LOG:RABBITMQ] - Error processing message on %s: Reason=%s", queue, e, exc_info=True)


async def start_rabbitmq_listener(queue: str, config: RabbitMQConfig) -> None:
    """Start consuming ``queue`` on the shared connection."""
    if connection is None:
        logger.error("[LOG:RABBITMQ] - Cannot listen on %s without a connection", queue)
        return
    listen_channel = await connection.channel()
    await listen_channel.set_qos(prefetch_count=config["prefetch_count"])
    declared = await listen_channel.declare_queue(queue, durable=True)
    await declared.consume(lambda message: handle_message(queue, message))
    logger.info("[LOG:RABBITMQ] - Listening for messages on %s", queue)
