"""Database engine and session management for the pantry store."""

import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from shelfwise.core.config import SETTINGS

LOGGER: logging.Logger = logging.getLogger(__name__)


class Base(DeclarativeBase):  # pylint: disable=too-few-public-methods
    """Base class for all database models."""


def build_session_maker(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Build a session factory bound to the given engine.

    Args:
        engine (AsyncEngine): The engine sessions should use.

    Returns:
        async_sessionmaker[AsyncSession]: The session factory.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


ENGINE: AsyncEngine = create_async_engine(
    SETTINGS.database_url,
    echo=SETTINGS.debug,
)
ASYNC_SESSION_MAKER: async_sessionmaker[AsyncSession] = build_session_maker(
    ENGINE
)


async def init_db(engine: AsyncEngine = ENGINE) -> None:
    """Create the pantry tables if they do not exist.

    Args:
        engine (AsyncEngine): The engine to create tables on.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    LOGGER.debug("Pantry tables ready on %s", engine.url)


async def close_db() -> None:
    """Close database connection."""
    await ENGINE.dispose()
