# -*- coding: utf-8 -*-
"""Decoding of cancel requests and assembly of their responses."""

from .cancellation import (
    CancelsCaller,
    CancelsResult,
    get_accepter,
)
from .errors import RequestDecodeError
from .messaging.types import MessageType
from .sql.schemas import (
    CancelsRequest,
    CancelsResponse,
)
from pydantic import ValidationError
from typing import (
    List,
    Optional,
)
import logging

logger = logging.getLogger(__name__)


def decode_request(message: MessageType) -> CancelsRequest:
    try:
        return CancelsRequest.model_validate(message)
    except ValidationError as e:
        raise RequestDecodeError(f"invalid cancel request: {e}") from e


def build_response(
    request: CancelsRequest,
    accepter: List[str],
    result: Optional[CancelsResult],
) -> CancelsResponse:
    envelope = request.model_dump(exclude={"header", "accepter"})
    if result is None:
        return CancelsResponse(
            **envelope,
            accepter=accepter,
            api_processing_result=False,
            api_processing_error=f"unknown api type {request.api_type}",
        )
    return CancelsResponse(
        **envelope,
        accepter=accepter,
        message=result.to_message(),
        sql_update_result=result.sql_update_result,
        sql_update_error=result.sql_update_error,
    )


def rejected_response(message: MessageType, reason: str) -> CancelsResponse:
    return CancelsResponse(
        connection_key=str(message.get("connection_key") or ""),
        redis_key=str(message.get("redis_key") or ""),
        runtime_session_id=str(message.get("runtime_session_id") or ""),
        api_processing_result=False,
        api_processing_error=reason,
    )


async def process_cancels(caller: CancelsCaller, message: MessageType) -> CancelsResponse:
    """Run one raw cancel request through ``caller`` and build its response."""
    try:
        request = decode_request(message)
    except RequestDecodeError as e:
        logger.error("[LOG:CANCELS] - %s", e)
        return rejected_response(message, str(e))

    accepter = get_accepter(request)
    result = await caller.async_cancels(accepter, request)
    return build_response(request, accepter, result)
