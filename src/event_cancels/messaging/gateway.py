# -*- coding: utf-8 -*-
"""Request/acknowledgement client for the SQL writer queue."""

from ..errors import GatewayError
from .types import MessageType
from typing import (
    Any,
    Dict,
    Optional,
)
import aio_pika
import asyncio
import json
import logging
import uuid

logger = logging.getLogger(__name__)


def is_success(ack: Any) -> bool:
    """An acknowledgement succeeds only when it carries ``result == "success"``."""
    if not isinstance(ack, dict):
        return False
    result = ack.get("result")
    if not isinstance(result, str):
        return False
    return result == "success"


class PersistenceGateway:
    """Sends one persistence command and waits for its reply.

    Replies arrive on an exclusive callback queue and are matched to the
    pending request by correlation id.
    """

    def __init__(self, queue: str, timeout: Optional[float] = None):
        self._queue = queue
        self._timeout = timeout
        self._channel: Optional[aio_pika.abc.AbstractChannel] = None
        self._callback_queue: Optional[aio_pika.abc.AbstractQueue] = None
        self._futures: Dict[str, asyncio.Future] = {}

    @property
    def connected(self) -> bool:
        return self._channel is not None and not self._channel.is_closed

    async def connect(self, connection: aio_pika.abc.AbstractConnection) -> "PersistenceGateway":
        self._channel = await connection.channel()
        self._callback_queue = await self._channel.declare_queue(exclusive=True, auto_delete=True)
        await self._callback_queue.consume(self._on_response, no_ack=True)
        logger.info(
            "[LOG:GATEWAY] - Connected: queue=%s, callback_queue=%s",
            self._queue,
            self._callback_queue.name,
        )
        return self

    async def close(self) -> None:
        for future in self._futures.values():
            if not future.done():
                future.cancel()
        self._futures.clear()
        if self._channel is not None and not self._channel.is_closed:
            await self._channel.close()
        self._channel = None
        self._callback_queue = None

    async def _on_response(self, message: aio_pika.abc.AbstractIncomingMessage) -> None:
        future = self._futures.pop(message.correlation_id or "", None)
        if future is None:
            logger.warning("[LOG:GATEWAY] - Unexpected reply: correlation_id=%s", message.correlation_id)
            return
        try:
            ack = json.loads(message.body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.error("[LOG:GATEWAY] - Undecodable reply: correlation_id=%s", message.correlation_id)
            ack = None
        if not future.done():
            future.set_result(ack)

    async def request(self, function: str, message: MessageType, session_id: str) -> Any:
        """Publish ``message`` for ``function`` and return the decoded acknowledgement."""
        if not self.connected:
            raise GatewayError(function, session_id, "channel not connected")

        correlation_id = str(uuid.uuid4())
        future = asyncio.get_running_loop().create_future()
        self._futures[correlation_id] = future
        body = json.dumps({
            "message": message,
            "function": function,
            "runtime_session_id": session_id,
        }).encode()

        try:
            await self._channel.default_exchange.publish(
                aio_pika.Message(
                    body=body,
                    content_type="application/json",
                    correlation_id=correlation_id,
                    reply_to=self._callback_queue.name,
                ),
                routing_key=self._queue,
            )
            logger.debug(
                "[CMD:SQL:SENT] - function=%s, runtime_session_id=%s, correlation_id=%s",
                function,
                session_id,
                correlation_id,
            )
            return await asyncio.wait_for(future, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise GatewayError(function, session_id, f"no reply within {self._timeout}s") from e
        except Exception as e:
            raise GatewayError(function, session_id, str(e)) from e
        finally:
            self._futures.pop(correlation_id, None)
