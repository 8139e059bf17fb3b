# -*- coding: utf-8 -*-
"""Shared collaborators of the cancellation caller."""

from .cancellation import (
    CancelsCaller,
    EventReader,
    SqlEventReader,
)
from .messaging import (
    PUBLISHING_QUEUES,
    REQUEST_TIMEOUT,
)
from .messaging.gateway import PersistenceGateway
from .sql import SessionLocal
from typing import Optional
import aio_pika
import logging

logger = logging.getLogger(__name__)

gateway: Optional[PersistenceGateway] = None
reader: Optional[EventReader] = None


# Persistence gateway ##############################################################################
async def init_gateway(connection: aio_pika.abc.AbstractConnection) -> PersistenceGateway:
    global gateway
    gateway = await PersistenceGateway(PUBLISHING_QUEUES["sql"], REQUEST_TIMEOUT).connect(connection)
    return gateway


def get_gateway() -> PersistenceGateway:
    """
    Returns the shared gateway. Before ``init_gateway`` runs every request
    through it fails as a transport error.
    """
    global gateway
    if gateway is None:
        logger.debug("[LOG:DEPENDENCIES] - Creating unconnected persistence gateway")
        gateway = PersistenceGateway(PUBLISHING_QUEUES["sql"], REQUEST_TIMEOUT)
    return gateway


# Database #########################################################################################
def get_reader() -> EventReader:
    global reader
    if reader is None:
        reader = SqlEventReader(SessionLocal)
    return reader


def get_caller() -> CancelsCaller:
    return CancelsCaller(get_gateway(), get_reader())


# Shutdown hook ####################################################################################
async def shutdown_dependencies() -> None:
    """Gracefully close resources on application shutdown."""
    global gateway
    if gateway is not None:
        logger.info("[LOG:DEPENDENCIES] - Closing persistence gateway")
        await gateway.close()
        gateway = None
