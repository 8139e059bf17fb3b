from ..sql.schemas import (
    Campaign,
    CancelsMessage,
    Game,
    Header,
    PointTransaction,
)
from dataclasses import (
    dataclass,
    field,
)
from typing import (
    Dict,
    List,
    Optional,
)

# Result attribute holding the records of each dependent entity type.
RECORD_SLOTS: Dict[str, str] = {
    "Campaign": "campaigns",
    "Game": "games",
    "PointTransaction": "point_transactions",
}


@dataclass
class HandlerResult:
    """Outcome of one cancellation handler.

    ``None`` in a record slot means the handler produced no data for that
    entity type. ``error`` carries the failure reason to report, if any.
    """

    header: Optional[Header] = None
    campaigns: Optional[List[Campaign]] = None
    games: Optional[List[Game]] = None
    point_transactions: Optional[List[PointTransaction]] = None
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: Optional[str] = None) -> "HandlerResult":
        return cls(error=error)

    @classmethod
    def with_records(cls, accepter: str, records: List) -> "HandlerResult":
        return cls(**{RECORD_SLOTS[accepter]: records})


@dataclass
class CancelsResult:
    """Records touched by one cancel request plus its overall SQL outcome."""

    header: Optional[Header] = None
    campaigns: List[Campaign] = field(default_factory=list)
    games: List[Game] = field(default_factory=list)
    point_transactions: List[PointTransaction] = field(default_factory=list)
    sql_update_result: Optional[bool] = None
    sql_update_error: str = ""

    @property
    def failed(self) -> bool:
        return self.sql_update_result is False

    def record_failure(self, reason: str) -> None:
        # First failure wins.
        if self.failed:
            return
        self.sql_update_result = False
        self.sql_update_error = reason

    def merge_header(self, result: HandlerResult) -> None:
        if result.error is not None:
            self.record_failure(result.error)
        self.header = result.header
        if result.header is None or result.campaigns is None or result.games is None:
            return
        self.campaigns.extend(result.campaigns)
        self.games.extend(result.games)
        self.point_transactions.extend(result.point_transactions or [])

    def merge_records(self, accepter: str, result: HandlerResult) -> None:
        if result.error is not None:
            self.record_failure(result.error)
        slot = RECORD_SLOTS[accepter]
        produced = getattr(result, slot)
        if produced is not None:
            getattr(self, slot).extend(produced)

    def to_message(self) -> CancelsMessage:
        return CancelsMessage(
            header=self.header,
            campaigns=self.campaigns,
            games=self.games,
            point_transactions=self.point_transactions,
        )
