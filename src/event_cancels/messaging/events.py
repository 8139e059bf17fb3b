from ..dependencies import get_caller
from ..formatter import process_cancels
from .global_vars import (
    LISTENING_QUEUES,
    PUBLISHING_QUEUES,
)
from .types import MessageType
from .utils import (
    publish_message,
    register_queue_handler,
)
import logging

logger = logging.getLogger(__name__)


@register_queue_handler(LISTENING_QUEUES["cancels"])
async def cancels_request(message: MessageType) -> None:
    logger.info(
        "[EVENT:CANCELS:RECEIVED] - runtime_session_id=%s, accepter=%s",
        message.get("runtime_session_id"),
        message.get("Accepter"),
    )

    response = await process_cancels(get_caller(), message)

    await publish_message(PUBLISHING_QUEUES["response"], response.to_wire())
    logger.info(
        "[EVENT:CANCELS:RESPONDED] - runtime_session_id=%s, sql_update_result=%s, sql_update_error=%s",
        response.runtime_session_id,
        response.sql_update_result,
        response.sql_update_error,
    )
