from ..flags import CancelFlag
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)
from typing import (
    List,
    Optional,
)


# Records ##########################################################################################
class EventRecord(BaseModel):
    """Common shape of every event table row exchanged on the wire."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    event: Optional[int] = Field(default=None, alias="Event")
    is_cancelled: CancelFlag = Field(default=CancelFlag.UNSET, alias="IsCancelled")

    @field_validator("is_cancelled", mode="before")
    @classmethod
    def _decode_flag(cls, value):
        return CancelFlag.from_wire(value)

    @field_serializer("is_cancelled")
    def _encode_flag(self, flag: CancelFlag) -> Optional[bool]:
        return flag.to_wire()

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class Header(EventRecord):
    pass


class Campaign(EventRecord):
    campaign: int = Field(alias="Campaign")


class Game(EventRecord):
    game: int = Field(alias="Game")


class PointTransaction(EventRecord):
    sender: int = Field(alias="Sender")
    receiver: int = Field(alias="Receiver")
    point_condition_record: int = Field(alias="PointConditionRecord")
    point_condition_sequential_number: int = Field(alias="PointConditionSequentialNumber")


# Requests #########################################################################################
class HeaderRequest(Header):
    campaigns: List[Campaign] = Field(default_factory=list, alias="Campaign")
    games: List[Game] = Field(default_factory=list, alias="Game")
    point_transactions: List[PointTransaction] = Field(default_factory=list, alias="PointTransaction")

    @field_validator("campaigns", "games", "point_transactions", mode="before")
    @classmethod
    def _null_as_empty(cls, value):
        return [] if value is None else value


class Envelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    connection_key: str = ""
    result: bool = True
    redis_key: str = ""
    filepath: str = ""
    api_status_code: int = 0
    runtime_session_id: str = ""
    business_partner: int = 0
    service_label: str = ""
    api_type: str = Field(default="", alias="APIType")
    api_schema: str = Field(default="", alias="APISchema")
    accepter: List[str] = Field(default_factory=list, alias="Accepter")


class CancelsRequest(Envelope):
    header: HeaderRequest = Field(alias="Header")


# Responses ########################################################################################
class CancelsMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    header: Optional[Header] = Field(default=None, alias="Header")
    campaigns: List[Campaign] = Field(default_factory=list, alias="Campaign")
    games: List[Game] = Field(default_factory=list, alias="Game")
    point_transactions: List[PointTransaction] = Field(default_factory=list, alias="PointTransaction")


class CancelsResponse(Envelope):
    message: Optional[CancelsMessage] = None
    sql_update_result: Optional[bool] = None
    sql_update_error: str = ""
    api_processing_result: bool = True
    api_processing_error: str = ""

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class HealthMessage(BaseModel):
    detail: str
    rabbitmq: bool
