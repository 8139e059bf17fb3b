from .types import RabbitMQConfig
from pathlib import Path
from typing import (
    Dict,
    LiteralString,
)
import os

# RabbitMQ Configuration ###########################################################################
RABBITMQ_CONFIG: RabbitMQConfig = {
    "host": os.getenv("RABBITMQ_HOST", "localhost"),
    "port": int(os.getenv("RABBITMQ_PORT", "5672")),
    "username": os.getenv("RABBITMQ_USER", "guest"),
    "password": os.getenv("RABBITMQ_PASSWD", "guest"),
    "virtual_host": os.getenv("RABBITMQ_VHOST", "/"),
    "use_tls": bool(int(os.getenv("RABBITMQ_USE_TLS", "0"))),
    "ca_cert": Path(ca_cert_path) if (ca_cert_path := os.getenv("RABBITMQ_CA_CERT_PATH", None)) is not None else None,
    "client_cert": Path(client_cert_path) if (client_cert_path := os.getenv("RABBITMQ_CLIENT_CERT_PATH", None)) is not None else None,
    "client_key": Path(client_key_path) if (client_key_path := os.getenv("RABBITMQ_CLIENT_KEY_PATH", None)) is not None else None,
    "prefetch_count": int(os.getenv("RABBITMQ_PREFETCH_COUNT", 10)),
}

# Seconds to wait for one acknowledgement from the SQL writer
REQUEST_TIMEOUT: float = float(os.getenv("RMQ_REQUEST_TIMEOUT", "30"))

PUBLISHING_QUEUES: Dict[LiteralString, LiteralString] = {
    "sql": os.getenv("RMQ_QUEUE_TO_SQL", "data-platform-api-event-cancels-sql-queue"),
    "response": os.getenv("RMQ_QUEUE_TO_RESPONSE", "data-platform-api-event-cancels-response-queue"),
}
LISTENING_QUEUES: Dict[LiteralString, LiteralString] = {
    "cancels": os.getenv("RMQ_QUEUE_FROM", "data-platform-api-event-cancels-queue"),
}
