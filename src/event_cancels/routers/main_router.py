from ..cancellation import CancelsCaller
from ..dependencies import get_caller
from ..formatter import process_cancels
from ..messaging.utils import is_rabbitmq_healthy
from ..sql import (
    CancelsResponse,
    HealthMessage,
)
from fastapi import (
    APIRouter,
    Body,
    Depends,
    HTTPException,
    status,
)
from typing import (
    Any,
    Dict,
)
import logging
import socket

logger = logging.getLogger(__name__)

Router = APIRouter(prefix="/event", tags=["Event"])


def raise_and_log_error(logger: logging.Logger, status_code: int, message: str) -> None:
    logger.error(message)
    raise HTTPException(status_code=status_code, detail=message)


# ------------------------------------------------------------------------------------
# Health check
# ------------------------------------------------------------------------------------
@Router.get(
    "/health",
    summary="Health check endpoint",
    response_model=HealthMessage,
)
async def health_check():
    if not is_rabbitmq_healthy():
        raise_and_log_error(
            logger=logger,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            message="[LOG:REST] - RabbitMQ not reachable",
        )

    container_id = socket.gethostname()
    logger.debug(f"[LOG:REST] - GET '/health' served by {container_id}")
    return {
        "detail": f"OK - Served by {container_id}",
        "rabbitmq": True,
    }


# ------------------------------------------------------------------------------------
# Cancels
# ------------------------------------------------------------------------------------
@Router.post(
    "/cancels",
    summary="Cancel an event or its dependents and wait for the result",
    response_model=CancelsResponse,
    response_model_by_alias=True,
)
async def cancels_endpoint(
    message: Dict[str, Any] = Body(...),
    caller: CancelsCaller = Depends(get_caller),
):
    logger.debug(
        "[LOG:REST] - POST '/event/cancels' called: "
        f"runtime_session_id={message.get('runtime_session_id')}"
    )
    response = await process_cancels(caller, message)
    if not response.api_processing_result:
        raise_and_log_error(
            logger=logger,
            status_code=status.HTTP_400_BAD_REQUEST,
            message=f"[LOG:REST] - {response.api_processing_error}",
        )
    return response
