from .crud import (
    get_event_campaigns,
    get_event_games,
    get_event_header,
    get_event_point_transactions,
)
from .database import (
    Base,
    Engine,
    SessionLocal,
)
from .models import (
    EventCampaign,
    EventGame,
    EventHeader,
    EventPointTransaction,
)
from .schemas import (
    Campaign,
    CancelsMessage,
    CancelsRequest,
    CancelsResponse,
    EventRecord,
    Game,
    Header,
    HeaderRequest,
    HealthMessage,
    PointTransaction,
)
from typing import (
    List,
    LiteralString,
)

__all__: List[LiteralString] = [
    "Base",
    "Campaign",
    "CancelsMessage",
    "CancelsRequest",
    "CancelsResponse",
    "Engine",
    "EventCampaign",
    "EventGame",
    "EventHeader",
    "EventPointTransaction",
    "EventRecord",
    "Game",
    "get_event_campaigns",
    "get_event_games",
    "get_event_header",
    "get_event_point_transactions",
    "Header",
    "HeaderRequest",
    "HealthMessage",
    "PointTransaction",
    "SessionLocal",
]
