from ..sql.schemas import CancelsRequest
from .handlers import CascadeHandler
from .reader import EventReader
from .result import CancelsResult
from .rules import (
    ACCEPTERS,
    DEPENDENT_RULES,
    HEADER_RULE,
)
from typing import (
    List,
    Optional,
)
import logging

logger = logging.getLogger(__name__)

API_TYPE_CANCELS = "cancels"


def get_accepter(request: CancelsRequest) -> List[str]:
    """Entity types to process; empty or ``"All"`` selects every type."""
    accepter = list(request.accepter)
    if not accepter or accepter[0] == "All":
        return list(ACCEPTERS)
    return accepter


class CancelsCaller:
    """Runs the cancellation handler of every accepted entity type, in order."""

    def __init__(self, gateway, reader: EventReader):
        self._gateway = gateway
        self._reader = reader

    async def async_cancels(self, accepter: List[str], request: CancelsRequest) -> Optional[CancelsResult]:
        if request.api_type != API_TYPE_CANCELS:
            logger.error("[LOG:CANCELS] - unknown api type %s", request.api_type)
            return None
        return await self._cancel_sql_process(accepter, request)

    async def _cancel_sql_process(self, accepter: List[str], request: CancelsRequest) -> CancelsResult:
        handler = CascadeHandler(self._gateway, self._reader, request.runtime_session_id)
        dependent_rules = {rule.accepter: rule for rule in DEPENDENT_RULES}
        result = CancelsResult()

        for name in accepter:
            logger.debug(
                "[LOG:CANCELS] - Processing %s: runtime_session_id=%s, event=%s",
                name,
                request.runtime_session_id,
                request.header.event,
            )
            if name == HEADER_RULE.accepter:
                result.merge_header(await handler.cancel_header(request.header))
            elif name in dependent_rules:
                result.merge_records(name, await handler.cancel_dependents(dependent_rules[name], request.header))
            else:
                logger.debug("[LOG:CANCELS] - Ignoring unknown accepter %s", name)

        if result.failed:
            logger.warning(
                "[LOG:CANCELS] - Cancel finished with failure: runtime_session_id=%s, Reason=%s",
                request.runtime_session_id,
                result.sql_update_error,
            )
        return result
