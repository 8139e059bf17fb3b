"""
Shared fixtures for the event cancels tests.
"""

import pytest

from event_cancels.flags import CancelFlag
from event_cancels.sql.schemas import Campaign, Game, Header, PointTransaction

from tests.mocks import MockGateway, MockReader


EVENT = 100


@pytest.fixture
def gateway() -> MockGateway:
    return MockGateway()


@pytest.fixture
def persisted_header() -> Header:
    return Header(event=EVENT, is_cancelled=CancelFlag.UNSET)


@pytest.fixture
def reader(persisted_header: Header) -> MockReader:
    return MockReader(
        header=persisted_header,
        campaigns=[
            Campaign(event=EVENT, campaign=1, is_cancelled=CancelFlag.UNSET),
            Campaign(event=EVENT, campaign=2, is_cancelled=CancelFlag.REVERSED),
        ],
        games=[
            Game(event=EVENT, game=7, is_cancelled=CancelFlag.UNSET),
        ],
        point_transactions=[
            PointTransaction(
                event=EVENT,
                sender=10,
                receiver=20,
                point_condition_record=3,
                point_condition_sequential_number=1,
                is_cancelled=CancelFlag.UNSET,
            ),
        ],
    )


@pytest.fixture
def request_factory():
    """Build a raw cancel request the way it arrives on the queue."""

    def create_request(
        accepter: list[str] | None = None,
        is_cancelled: bool | None = True,
        campaigns: list[dict] | None = None,
        games: list[dict] | None = None,
        point_transactions: list[dict] | None = None,
        api_type: str = "cancels",
    ) -> dict:
        return {
            "connection_key": "request",
            "result": True,
            "redis_key": "abcdef",
            "runtime_session_id": "session-1",
            "business_partner": 201,
            "service_label": "EVENT",
            "APIType": api_type,
            "Accepter": accepter if accepter is not None else ["Header"],
            "Header": {
                "Event": EVENT,
                "IsCancelled": is_cancelled,
                "Campaign": campaigns or [],
                "Game": games or [],
                "PointTransaction": point_transactions or [],
            },
        }

    return create_request
