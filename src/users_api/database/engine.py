"""Database engine and async session factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from users_api.models.state import State  # noqa: F401  (registers the table)
from users_api.models.user import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine and hands out sessions.

    One instance is built at application startup and closed at shutdown;
    route handlers get it through :func:`get_database` rather than a
    module-level global.
    """

    def __init__(self, database_url: str, echo: bool = False, **engine_kwargs: Any) -> None:
        self.url = database_url
        self.engine = create_async_engine(database_url, echo=echo, **engine_kwargs)
        self._session_factory = async_sessionmaker(self.engine, expire_on_commit=False)

    async def create_all(self) -> None:
        """Create all tables that don't yet exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session, rolling back if the block raises.

        Callers commit explicitly.
        """
        async with self._session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def close(self) -> None:
        """Dispose of the engine's connection pool."""
        await self.engine.dispose()
        logger.info("Database connections closed")


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the application's ``Database``."""
    return request.app.state.db


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a session bound to the app's database."""
    async with get_database(request).session() as session:
        yield session
