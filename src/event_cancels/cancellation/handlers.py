from ..errors import GatewayError
from ..flags import CancelFlag
from ..messaging.gateway import is_success
from ..sql.schemas import (
    EventRecord,
    HeaderRequest,
)
from .reader import EventReader
from .result import HandlerResult
from .rules import (
    DEPENDENT_RULES,
    EntityRule,
    HEADER_RULE,
)
from typing import (
    Dict,
    List,
    Optional,
)
import logging

logger = logging.getLogger(__name__)


class CascadeHandler:
    """Applies one cancel request to an event and its dependents.

    Every persistence command is acknowledged before the next one is sent,
    and the first failed command stops the handler. Commands already
    acknowledged are kept, so a failed cascade can leave the event partially
    updated.
    """

    def __init__(self, gateway, reader: EventReader, session_id: str):
        self._gateway = gateway
        self._reader = reader
        self._session_id = session_id

    async def submit(self, rule: EntityRule, record: EventRecord) -> bool:
        """Persist one record and report whether it was acknowledged."""
        try:
            ack = await self._gateway.request(rule.function, record.to_wire(), self._session_id)
        except GatewayError as e:
            logger.error("[LOG:CANCELS] - %s", e, exc_info=True)
            return False
        if not is_success(ack):
            logger.warning(
                "[LOG:CANCELS] - %s rejected: runtime_session_id=%s, ack=%s",
                rule.function,
                self._session_id,
                ack,
            )
            return False
        return True

    async def cancel_header(self, request: HeaderRequest) -> HandlerResult:
        flag = request.is_cancelled
        if not flag.is_set:
            logger.info("[LOG:CANCELS] - No header change requested: event=%s", request.event)
            return HandlerResult()

        header = await self._reader.read_header(request.event)
        if header is None:
            return HandlerResult()

        header = HEADER_RULE.payload(header.event, request)
        if not await self.submit(HEADER_RULE, header):
            return HandlerResult.failed(HEADER_RULE.failure_message)

        # Reversing a header cancellation leaves its dependents alone
        if flag is CancelFlag.REVERSED:
            return HandlerResult(header=header)

        cascaded: Dict[str, List[EventRecord]] = {}
        for rule in DEPENDENT_RULES:
            records = await self._reader.read_dependents(rule, header.event)
            if records is None:
                return HandlerResult()
            updated: List[EventRecord] = []
            for record in records:
                record = record.model_copy(update={"is_cancelled": flag})
                if not await self.submit(rule, record):
                    return HandlerResult.failed(rule.failure_message)
                updated.append(record)
            cascaded[rule.accepter] = updated

        logger.info(
            "[LOG:CANCELS] - Header cancelled with dependents: event=%s, campaigns=%d, games=%d, point_transactions=%d",
            header.event,
            len(cascaded["Campaign"]),
            len(cascaded["Game"]),
            len(cascaded["PointTransaction"]),
        )
        return HandlerResult(
            header=header,
            campaigns=cascaded["Campaign"],
            games=cascaded["Game"],
            point_transactions=cascaded["PointTransaction"],
        )

    async def cancel_dependents(self, rule: EntityRule, request: HeaderRequest) -> HandlerResult:
        requested = rule.requested(request)
        if not requested:
            return HandlerResult.with_records(rule.accepter, [])

        written: List[EventRecord] = []
        for item in requested:
            if not item.is_cancelled.is_set:
                logger.debug("[LOG:CANCELS] - Skipping %s without change: %s", rule.accepter, item)
                continue
            record = rule.payload(request.event, item)
            if not await self.submit(rule, record):
                return HandlerResult.failed(rule.failure_message)
            written.append(record)

        # Reversing a dependent's cancellation reverses the header's too
        if requested[0].is_cancelled is CancelFlag.REVERSED:
            failure = await self._reverse_header(request.event)
            if failure is not None:
                return failure

        return HandlerResult.with_records(rule.accepter, written)

    async def _reverse_header(self, event: Optional[int]) -> Optional[HandlerResult]:
        header = await self._reader.read_header(event)
        if header is None:
            return HandlerResult.failed()
        header = header.model_copy(update={"is_cancelled": CancelFlag.REVERSED})
        if not await self.submit(HEADER_RULE, header):
            return HandlerResult.failed(HEADER_RULE.failure_message)
        logger.info("[LOG:CANCELS] - Header cancellation reversed: event=%s", header.event)
        return None
