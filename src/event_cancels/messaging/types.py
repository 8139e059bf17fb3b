from pathlib import Path
from typing import (
    Any,
    Dict,
    Optional,
    TypedDict,
)

MessageType = Dict[str, Any]


class RabbitMQConfig(TypedDict):
    host: str
    port: int
    username: str
    password: str
    virtual_host: str
    use_tls: bool
    ca_cert: Optional[Path]
    client_cert: Optional[Path]
    client_key: Optional[Path]
    prefetch_count: int
