from ..sql import (
    get_event_campaigns,
    get_event_games,
    get_event_header,
    get_event_point_transactions,
)
from ..sql.schemas import (
    EventRecord,
    Header,
)
from .rules import EntityRule
from abc import (
    ABC,
    abstractmethod,
)
from sqlalchemy.exc import SQLAlchemyError
from typing import (
    List,
    Optional,
)
import logging

logger = logging.getLogger(__name__)


class EventReader(ABC):
    """Current persisted state of an event and its dependents.

    Both methods return ``None`` when the state cannot be read.
    """

    @abstractmethod
    async def read_header(self, event: Optional[int]) -> Optional[Header]:
        pass

    @abstractmethod
    async def read_dependents(self, rule: EntityRule, event: Optional[int]) -> Optional[List[EventRecord]]:
        pass


class SqlEventReader(EventReader):
    QUERIES = {
        "Campaign": get_event_campaigns,
        "Game": get_event_games,
        "PointTransaction": get_event_point_transactions,
    }

    def __init__(self, session_factory):
        self._session_factory = session_factory

    async def read_header(self, event: Optional[int]) -> Optional[Header]:
        if event is None:
            logger.warning("[LOG:SQL] - Cannot read header without an event")
            return None
        try:
            async with self._session_factory() as db:
                row = await get_event_header(db, event)
        except SQLAlchemyError as e:
            logger.error("[LOG:SQL] - Header read failed: event=%s, Reason=%s", event, e, exc_info=True)
            return None
        if row is None:
            logger.warning("[LOG:SQL] - Header not found: event=%s", event)
            return None
        return _to_record(Header, row)

    async def read_dependents(self, rule: EntityRule, event: Optional[int]) -> Optional[List[EventRecord]]:
        if event is None:
            logger.warning("[LOG:SQL] - Cannot read %s data without an event", rule.accepter)
            return None
        query = self.QUERIES[rule.accepter]
        try:
            async with self._session_factory() as db:
                rows = await query(db, event)
        except SQLAlchemyError as e:
            logger.error(
                "[LOG:SQL] - %s read failed: event=%s, Reason=%s", rule.accepter, event, e, exc_info=True,
            )
            return None
        return [_to_record(rule.model, row) for row in rows]


def _to_record(model, row) -> EventRecord:
    return model(**{name: getattr(row, name) for name in model.model_fields})
