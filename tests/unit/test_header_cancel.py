"""
Tests for cancelling an event header and cascading to its dependents.
"""

import pytest

from event_cancels.cancellation import CancelFlag, CancelsCaller
from event_cancels.formatter import decode_request
from event_cancels.sql.schemas import Campaign, Header

from tests.mocks import FAILURE, MockGateway, MockReader, transport_error


async def run(gateway, reader, raw_request):
    request = decode_request(raw_request)
    return await CancelsCaller(gateway, reader).async_cancels(request.accepter, request)


class TestHeaderCascade:
    @pytest.mark.asyncio
    async def test_header_then_single_campaign(self, gateway, request_factory):
        reader = MockReader(
            header=Header(event=100),
            campaigns=[Campaign(event=100, campaign=1)],
        )

        result = await run(gateway, reader, request_factory(is_cancelled=True))

        assert gateway.functions == ["EventHeader", "EventCampaign"]
        assert result.header == Header(event=100, is_cancelled=CancelFlag.CANCELLED)
        assert result.campaigns == [Campaign(event=100, campaign=1, is_cancelled=CancelFlag.CANCELLED)]
        assert result.games == []
        assert result.point_transactions == []
        assert result.sql_update_result is None
        assert result.sql_update_error == ""

    @pytest.mark.asyncio
    async def test_cascades_to_every_dependent_after_header(self, gateway, reader, request_factory):
        result = await run(gateway, reader, request_factory(is_cancelled=True))

        assert gateway.functions == [
            "EventHeader",
            "EventCampaign",
            "EventCampaign",
            "EventGame",
            "EventPointTransaction",
        ]
        assert all(message["IsCancelled"] is True for _, message, _ in gateway.calls)
        assert len(result.campaigns) == 2
        assert len(result.games) == 1
        assert len(result.point_transactions) == 1
        assert all(
            record.is_cancelled is CancelFlag.CANCELLED
            for record in result.campaigns + result.games + result.point_transactions
        )

    @pytest.mark.asyncio
    async def test_commands_carry_session_id(self, gateway, reader, request_factory):
        await run(gateway, reader, request_factory(is_cancelled=True))

        assert {session_id for _, _, session_id in gateway.calls} == {"session-1"}

    @pytest.mark.asyncio
    async def test_reversed_header_skips_dependents(self, gateway, reader, request_factory):
        result = await run(gateway, reader, request_factory(is_cancelled=False))

        assert gateway.functions == ["EventHeader"]
        assert gateway.messages("EventHeader") == [{"Event": 100, "IsCancelled": False}]
        assert result.header == Header(event=100, is_cancelled=CancelFlag.REVERSED)
        assert result.campaigns == []
        assert result.games == []
        assert result.point_transactions == []
        assert result.sql_update_result is None

    @pytest.mark.asyncio
    async def test_unset_header_flag_writes_nothing(self, gateway, reader, request_factory):
        result = await run(gateway, reader, request_factory(is_cancelled=None))

        assert gateway.calls == []
        assert result.header is None
        assert result.sql_update_result is None

    @pytest.mark.asyncio
    async def test_recancelling_repeats_the_same_cascade(self, reader, request_factory):
        reader.header = Header(event=100, is_cancelled=CancelFlag.CANCELLED)
        first, second = MockGateway(), MockGateway()

        first_result = await run(first, reader, request_factory(is_cancelled=True))
        second_result = await run(second, reader, request_factory(is_cancelled=True))

        assert first.calls == second.calls
        assert first_result == second_result
        assert second_result.sql_update_result is None


class TestHeaderCascadeFailures:
    @pytest.mark.asyncio
    async def test_campaign_rejection_discards_header(self, request_factory):
        gateway = MockGateway(acks={"EventCampaign": [FAILURE]})
        reader = MockReader(
            header=Header(event=100),
            campaigns=[Campaign(event=100, campaign=1)],
        )

        result = await run(gateway, reader, request_factory(is_cancelled=True))

        assert result.sql_update_result is False
        assert result.sql_update_error == "Event Campaign Data cannot cancel"
        assert result.header is None
        assert result.campaigns == []

    @pytest.mark.asyncio
    async def test_header_rejection_stops_before_dependents(self, reader, request_factory):
        gateway = MockGateway(acks={"EventHeader": [{"result": "failure"}]})

        result = await run(gateway, reader, request_factory(is_cancelled=True))

        assert gateway.functions == ["EventHeader"]
        assert result.sql_update_result is False
        assert result.sql_update_error == "Header Data cannot cancel"
        assert result.header is None

    @pytest.mark.asyncio
    async def test_header_transport_error_is_reported_as_header_failure(self, reader, request_factory):
        gateway = MockGateway(acks={"EventHeader": [transport_error()]})

        result = await run(gateway, reader, request_factory(is_cancelled=True))

        assert gateway.functions == ["EventHeader"]
        assert result.sql_update_result is False
        assert result.sql_update_error == "Header Data cannot cancel"

    @pytest.mark.asyncio
    async def test_failure_stops_remaining_lists(self, reader, request_factory):
        gateway = MockGateway(acks={"EventGame": [{"unexpected": "shape"}]})

        result = await run(gateway, reader, request_factory(is_cancelled=True))

        assert gateway.functions == ["EventHeader", "EventCampaign", "EventCampaign", "EventGame"]
        assert result.sql_update_error == "Event Game Data cannot cancel"
        assert result.games == []
        assert result.point_transactions == []

    @pytest.mark.asyncio
    async def test_point_transaction_failure_keeps_earlier_writes(self, reader, request_factory):
        gateway = MockGateway(acks={"EventPointTransaction": [{"result": False}]})

        result = await run(gateway, reader, request_factory(is_cancelled=True))

        # Acknowledged writes are not rolled back
        assert gateway.functions[-1] == "EventPointTransaction"
        assert gateway.functions.count("EventCampaign") == 2
        assert result.sql_update_error == "Event PointTransaction Data cannot cancel"
        assert result.header is None

    @pytest.mark.asyncio
    async def test_unreadable_header_is_silent(self, gateway, request_factory):
        # A header that cannot be read produces no data and no error message
        reader = MockReader(header=None)

        result = await run(gateway, reader, request_factory(is_cancelled=True))

        assert gateway.calls == []
        assert result.header is None
        assert result.sql_update_result is None
        assert result.sql_update_error == ""

    @pytest.mark.asyncio
    async def test_unreadable_dependents_stop_silently(self, gateway, reader, request_factory):
        reader.unreadable = ("Game",)

        result = await run(gateway, reader, request_factory(is_cancelled=True))

        assert gateway.functions == ["EventHeader", "EventCampaign", "EventCampaign"]
        assert result.header is None
        assert result.campaigns == []
        assert result.sql_update_result is None
