"""Health service implementation."""

import time
from typing import Any, Dict

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ... import __version__
from ..logging import get_logger
from ..repositories.user_repository import UserRepository
from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService

logger = get_logger("services.health")


class HealthService(IHealthService):
    """Health check service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        db_health = await self.check_database_health()
        return HealthCheckResponse(
            status="healthy" if db_health["connected"] else "unhealthy",
            version=__version__,
            checks={"database": db_health},
        )

    async def check_database_health(self) -> Dict[str, Any]:
        """Check DB connection and report how many accounts exist."""
        start = time.perf_counter()
        try:
            await self.session.execute(text("SELECT 1"))
            user_count = await self.user_repo.count_users()
        except SQLAlchemyError as exc:
            logger.warning("Database health check failed", exc_info=exc)
            # error detail stays in the logs
            return {
                "connected": False,
                "status": "unhealthy",
                "response_time_ms": None,
                "user_count": None,
            }

        return {
            "connected": True,
            "status": "healthy",
            "response_time_ms": round((time.perf_counter() - start) * 1000, 2),
            "user_count": user_count,
        }
