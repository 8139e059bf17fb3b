from contextlib import asynccontextmanager
import asyncio
import logging.config
import os

# Configure logging
logging.config.fileConfig(
    os.path.join(os.path.dirname(__file__), "logging.ini"),
    disable_existing_loggers=False,
)
logger = logging.getLogger(__name__)

from .dependencies import (
    init_gateway,
    shutdown_dependencies,
)
from .messaging import (
    LISTENING_QUEUES,
    RABBITMQ_CONFIG,
)
from .messaging import events  # noqa: F401 registers the queue handlers
from .messaging.utils import (
    close_rabbitmq,
    init_rabbitmq,
    start_rabbitmq_listener,
)
from .routers import Router
from .sql import (
    Base,
    Engine,
)
from fastapi import FastAPI
from hypercorn.asyncio import serve
from hypercorn.config import Config


# App Lifespan #####################################################################################
@asynccontextmanager
async def lifespan(__app: FastAPI):
    """Lifespan context manager."""
    try:
        logger.info("[LOG:CANCELS] - Starting up")
        try:
            logger.info("[LOG:CANCELS] - Creating database tables")
            async with Engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception:
            logger.error("[LOG:CANCELS] - Could not create tables at startup", exc_info=True)

        connection = await init_rabbitmq(RABBITMQ_CONFIG)
        if connection is None:
            logger.error("[LOG:CANCELS] - Running without RabbitMQ, cancel requests will fail")
        else:
            try:
                await init_gateway(connection)
                logger.info("[LOG:CANCELS] - Starting RabbitMQ listeners")
                for _, queue in LISTENING_QUEUES.items():
                    await start_rabbitmq_listener(queue, RABBITMQ_CONFIG)
            except Exception as e:
                logger.error(f"[LOG:CANCELS] - Could not start the RabbitMQ listeners: Reason={e}", exc_info=True)
        yield
    finally:
        logger.info("[LOG:CANCELS] - Shutting down")
        await shutdown_dependencies()
        await close_rabbitmq()
        await Engine.dispose()


# OpenAPI Documentation ############################################################################
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
logger.info("[LOG:CANCELS] - Running app version %s", APP_VERSION)
DESCRIPTION = """
Event cancels worker. Cancels an event header and cascades the change to
its campaigns, games and point transactions.
"""

tag_metadata = [
    {
        "name": "Event",
        "description": "Endpoints related to event cancellation",
    },
]

APP = FastAPI(
    redoc_url=None,
    title="FastAPI - Event cancels app",
    description=DESCRIPTION,
    version=APP_VERSION,
    servers=[{"url": "/", "description": "Development"}],
    license_info={
        "name": "MIT License",
        "url": "https://choosealicense.com/licenses/mit/",
    },
    openapi_tags=tag_metadata,
    lifespan=lifespan,
)

APP.include_router(Router)


def start_server():
    config = Config()

    config.bind = [os.getenv("HOST", "0.0.0.0") + ":" + os.getenv("PORT", "8000")]
    config.workers = int(os.getenv("WORKERS", "1"))

    logger.info("[LOG:CANCELS] - Starting Hypercorn server on %s", config.bind)

    asyncio.run(serve(APP, config))  # type: ignore
