# -*- coding: utf-8 -*-
"""Database session configuration for the event cancels worker."""

from sqlalchemy.ext.asyncio import (
    async_sessionmaker,
    AsyncSession,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
import logging
import os

logger = logging.getLogger(__name__)

# Database URL #####################################################################################
SQLALCHEMY_DATABASE_URL = os.getenv(
    "SQLALCHEMY_DATABASE_URL",
    "sqlite+aiosqlite:///./event.db",
)

# Async Engine #####################################################################################
try:
    Engine = create_async_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {},
        echo=False,
    )
    logger.info("[LOG:SQL] - Async database engine created")
except Exception as e:
    logger.error("[LOG:SQL] - Failed to create database engine: %s", str(e))
    raise

# Session factory ##################################################################################
SessionLocal = async_sessionmaker(
    bind=Engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)


# Declarative Base #################################################################################
class Base(DeclarativeBase):
    pass
