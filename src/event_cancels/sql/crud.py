# -*- coding: utf-8 -*-
"""Read-only queries over the event tables. Writes go through the SQL queue."""

from . import models
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import (
    Optional,
    Sequence,
)
import logging

logger = logging.getLogger(__name__)


async def get_event_header(db: AsyncSession, event: int) -> Optional[models.EventHeader]:
    """Load the header row of an event."""
    logger.debug("[LOG:SQL] - Fetching header for event=%s", event)
    result = await db.execute(
        select(models.EventHeader).where(models.EventHeader.event == event)
    )
    return result.scalar_one_or_none()


async def get_event_campaigns(db: AsyncSession, event: int) -> Sequence[models.EventCampaign]:
    logger.debug("[LOG:SQL] - Fetching campaigns for event=%s", event)
    result = await db.execute(
        select(models.EventCampaign)
        .where(models.EventCampaign.event == event)
        .order_by(models.EventCampaign.campaign)
    )
    return result.scalars().all()


async def get_event_games(db: AsyncSession, event: int) -> Sequence[models.EventGame]:
    logger.debug("[LOG:SQL] - Fetching games for event=%s", event)
    result = await db.execute(
        select(models.EventGame)
        .where(models.EventGame.event == event)
        .order_by(models.EventGame.game)
    )
    return result.scalars().all()


async def get_event_point_transactions(
    db: AsyncSession, event: int,
) -> Sequence[models.EventPointTransaction]:
    logger.debug("[LOG:SQL] - Fetching point transactions for event=%s", event)
    result = await db.execute(
        select(models.EventPointTransaction)
        .where(models.EventPointTransaction.event == event)
        .order_by(
            models.EventPointTransaction.sender,
            models.EventPointTransaction.receiver,
            models.EventPointTransaction.point_condition_record,
            models.EventPointTransaction.point_condition_sequential_number,
        )
    )
    return result.scalars().all()
