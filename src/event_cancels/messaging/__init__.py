from .global_vars import (
    LISTENING_QUEUES,
    PUBLISHING_QUEUES,
    RABBITMQ_CONFIG,
    REQUEST_TIMEOUT,
)
from .types import (
    MessageType,
    RabbitMQConfig,
)
from typing import (
    List,
    LiteralString,
)

__all__: List[LiteralString] = [
    "LISTENING_QUEUES",
    "MessageType",
    "PUBLISHING_QUEUES",
    "RABBITMQ_CONFIG",
    "RabbitMQConfig",
    "REQUEST_TIMEOUT",
]
