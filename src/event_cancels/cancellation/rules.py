from ..sql.schemas import (
    Campaign,
    EventRecord,
    Game,
    Header,
    HeaderRequest,
    PointTransaction,
)
from dataclasses import dataclass
from typing import (
    Callable,
    List,
    Optional,
    Tuple,
    Type,
)


@dataclass(frozen=True)
class EntityRule:
    """How one entity type is persisted and reported.

    ``requested`` picks the records of this type out of a decoded request and
    ``payload`` maps one requested record to the row sent for persistence.
    """

    accepter: str
    function: str
    failure_message: str
    model: Type[EventRecord]
    payload: Callable[[Optional[int], EventRecord], EventRecord]
    requested: Optional[Callable[[HeaderRequest], List[EventRecord]]] = None


def _header_payload(event: Optional[int], header: Header) -> Header:
    return Header(event=event, is_cancelled=header.is_cancelled)


def _campaign_payload(event: Optional[int], campaign: Campaign) -> Campaign:
    return Campaign(
        event=event,
        campaign=campaign.campaign,
        is_cancelled=campaign.is_cancelled,
    )


def _game_payload(event: Optional[int], game: Game) -> Game:
    return Game(
        event=event,
        game=game.game,
        is_cancelled=game.is_cancelled,
    )


def _point_transaction_payload(event: Optional[int], point_transaction: PointTransaction) -> PointTransaction:
    return PointTransaction(
        event=event,
        sender=point_transaction.sender,
        receiver=point_transaction.receiver,
        point_condition_record=point_transaction.point_condition_record,
        point_condition_sequential_number=point_transaction.point_condition_sequential_number,
        is_cancelled=point_transaction.is_cancelled,
    )


HEADER_RULE = EntityRule(
    accepter="Header",
    function="EventHeader",
    failure_message="Header Data cannot cancel",
    model=Header,
    payload=_header_payload,
)

CAMPAIGN_RULE = EntityRule(
    accepter="Campaign",
    function="EventCampaign",
    failure_message="Event Campaign Data cannot cancel",
    model=Campaign,
    requested=lambda request: request.campaigns,
    payload=_campaign_payload,
)

GAME_RULE = EntityRule(
    accepter="Game",
    function="EventGame",
    failure_message="Event Game Data cannot cancel",
    model=Game,
    requested=lambda request: request.games,
    payload=_game_payload,
)

POINT_TRANSACTION_RULE = EntityRule(
    accepter="PointTransaction",
    function="EventPointTransaction",
    failure_message="Event PointTransaction Data cannot cancel",
    model=PointTransaction,
    requested=lambda request: request.point_transactions,
    payload=_point_transaction_payload,
)

# Order in which a header cancellation walks its dependents.
DEPENDENT_RULES: Tuple[EntityRule, ...] = (
    CAMPAIGN_RULE,
    GAME_RULE,
    POINT_TRANSACTION_RULE,
)

ACCEPTERS: Tuple[str, ...] = (HEADER_RULE.accepter,) + tuple(rule.accepter for rule in DEPENDENT_RULES)
