from .database import Base
from sqlalchemy import (
    Boolean,
    ForeignKey,
    Integer,
)
from sqlalchemy.orm import (
    Mapped,
    mapped_column,
)
from typing import Optional


class EventHeader(Base):
    __tablename__ = "data_platform_event_header_data"

    event: Mapped[int] = mapped_column("Event", Integer, primary_key=True)
    is_cancelled: Mapped[Optional[bool]] = mapped_column("IsCancelled", Boolean, nullable=True)


class EventCampaign(Base):
    __tablename__ = "data_platform_event_campaign_data"

    event: Mapped[int] = mapped_column(
        "Event", ForeignKey(EventHeader.event), primary_key=True,
    )
    campaign: Mapped[int] = mapped_column("Campaign", Integer, primary_key=True)
    is_cancelled: Mapped[Optional[bool]] = mapped_column("IsCancelled", Boolean, nullable=True)


class EventGame(Base):
    __tablename__ = "data_platform_event_game_data"

    event: Mapped[int] = mapped_column(
        "Event", ForeignKey(EventHeader.event), primary_key=True,
    )
    game: Mapped[int] = mapped_column("Game", Integer, primary_key=True)
    is_cancelled: Mapped[Optional[bool]] = mapped_column("IsCancelled", Boolean, nullable=True)


class EventPointTransaction(Base):
    __tablename__ = "data_platform_event_point_transaction_data"

    event: Mapped[int] = mapped_column(
        "Event", ForeignKey(EventHeader.event), primary_key=True,
    )
    sender: Mapped[int] = mapped_column("Sender", Integer, primary_key=True)
    receiver: Mapped[int] = mapped_column("Receiver", Integer, primary_key=True)
    point_condition_record: Mapped[int] = mapped_column("PointConditionRecord", Integer, primary_key=True)
    point_condition_sequential_number: Mapped[int] = mapped_column(
        "PointConditionSequentialNumber", Integer, primary_key=True,
    )
    is_cancelled: Mapped[Optional[bool]] = mapped_column("IsCancelled", Boolean, nullable=True)
