from ..flags import CancelFlag
from .caller import (
    API_TYPE_CANCELS,
    CancelsCaller,
    get_accepter,
)
from .handlers import CascadeHandler
from .reader import (
    EventReader,
    SqlEventReader,
)
from .result import (
    CancelsResult,
    HandlerResult,
)
from .rules import (
    ACCEPTERS,
    CAMPAIGN_RULE,
    DEPENDENT_RULES,
    EntityRule,
    GAME_RULE,
    HEADER_RULE,
    POINT_TRANSACTION_RULE,
)

__all__: list[str] = [
    "ACCEPTERS",
    "API_TYPE_CANCELS",
    "CAMPAIGN_RULE",
    "CancelFlag",
    "CancelsCaller",
    "CancelsResult",
    "CascadeHandler",
    "DEPENDENT_RULES",
    "EntityRule",
    "EventReader",
    "GAME_RULE",
    "get_accepter",
    "HandlerResult",
    "HEADER_RULE",
    "POINT_TRANSACTION_RULE",
    "SqlEventReader",
]
