"""
Tests for acknowledgement interpretation and the request/reply gateway.
"""

import asyncio
import json
from types import SimpleNamespace

import pytest

from event_cancels.errors import GatewayError
from event_cancels.messaging.gateway import PersistenceGateway, is_success


class StubExchange:
    """Default exchange that answers every publish through the gateway's reply handler."""

    def __init__(self, gateway: PersistenceGateway, reply: bytes | None = None, error: Exception | None = None):
        self.gateway = gateway
        self.reply = reply
        self.error = error
        self.published = []

    async def publish(self, message, routing_key):
        if self.error is not None:
            raise self.error
        self.published.append((message, routing_key))
        if self.reply is not None:
            incoming = SimpleNamespace(correlation_id=message.correlation_id, body=self.reply)
            asyncio.get_running_loop().call_soon(
                lambda: asyncio.ensure_future(self.gateway._on_response(incoming))
            )


def connect_stub(gateway: PersistenceGateway, **kwargs) -> StubExchange:
    exchange = StubExchange(gateway, **kwargs)
    gateway._channel = SimpleNamespace(is_closed=False, default_exchange=exchange)
    gateway._callback_queue = SimpleNamespace(name="amq.gen-reply")
    return exchange


class TestIsSuccess:
    @pytest.mark.parametrize(
        "ack",
        [
            {"result": "failure"},
            {"result": True},
            {"result": None},
            {"status": "success"},
            {},
            None,
            "success",
            ["success"],
        ],
    )
    def test_anything_but_success_string_fails(self, ack):
        assert is_success(ack) is False

    def test_success(self):
        assert is_success({"result": "success", "sql_update_result": True}) is True


class TestPersistenceGateway:
    @pytest.mark.asyncio
    async def test_unconnected_gateway_raises(self):
        gateway = PersistenceGateway("sql-queue")

        with pytest.raises(GatewayError):
            await gateway.request("EventHeader", {"Event": 1}, "session-1")

    @pytest.mark.asyncio
    async def test_request_returns_matching_reply(self):
        gateway = PersistenceGateway("sql-queue", timeout=1)
        exchange = connect_stub(gateway, reply=json.dumps({"result": "success"}).encode())

        ack = await gateway.request("EventGame", {"Event": 1, "Game": 7, "IsCancelled": True}, "session-1")

        assert ack == {"result": "success"}
        message, routing_key = exchange.published[0]
        assert routing_key == "sql-queue"
        assert message.reply_to == "amq.gen-reply"
        assert json.loads(message.body) == {
            "message": {"Event": 1, "Game": 7, "IsCancelled": True},
            "function": "EventGame",
            "runtime_session_id": "session-1",
        }
        assert gateway._futures == {}

    @pytest.mark.asyncio
    async def test_undecodable_reply_is_not_success(self):
        gateway = PersistenceGateway("sql-queue", timeout=1)
        connect_stub(gateway, reply=b"not json")

        ack = await gateway.request("EventHeader", {"Event": 1}, "session-1")

        assert is_success(ack) is False

    @pytest.mark.asyncio
    async def test_missing_reply_times_out(self):
        gateway = PersistenceGateway("sql-queue", timeout=0.01)
        connect_stub(gateway)

        with pytest.raises(GatewayError, match="no reply"):
            await gateway.request("EventHeader", {"Event": 1}, "session-1")
        assert gateway._futures == {}

    @pytest.mark.asyncio
    async def test_publish_error_is_wrapped(self):
        gateway = PersistenceGateway("sql-queue", timeout=1)
        connect_stub(gateway, error=ConnectionError("broken pipe"))

        with pytest.raises(GatewayError) as error:
            await gateway.request("EventCampaign", {"Event": 1}, "session-1")

        assert error.value.function == "EventCampaign"
        assert isinstance(error.value.__cause__, ConnectionError)
