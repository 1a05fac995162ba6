# Database connection setup
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import Settings
from .core.logging import get_logger
from .core.models.base import BaseModel

logger = get_logger("database")


class Database:
    """Owns the engine and session factory for one application instance.

    Built once in the app lifespan and stored on ``app.state.db``; handlers
    reach it only through ``get_db_session``.
    """

    def __init__(self, url: str, echo: bool = False, engine: Optional[AsyncEngine] = None):
        self.url = url
        self.engine = engine or create_async_engine(url, echo=echo, pool_pre_ping=True)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url, echo=settings.database_echo)

    async def create_tables(self) -> None:
        """Create all tables."""
        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")


def get_database(request: Request) -> Database:
    """Database handle attached to the running app."""
    return request.app.state.db


async def get_db_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Get database session."""
    db = get_database(request)
    async with db.session_factory() as session:
        yield session
