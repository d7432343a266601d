import asyncpg
import logging
from typing import Optional

import config

logger = logging.getLogger(__name__)


class DatabasePool:
    """Owns the asyncpg pool shared by the course, round and location repositories."""

    def __init__(self):
        self._pool: Optional[asyncpg.Pool] = None

    async def initialize(
        self,
        dsn: Optional[str] = None,
        *,
        min_size: int = 2,
        max_size: int = 20,
        command_timeout: float = 10.0,
    ) -> None:
        """Open the pool once at startup. ``dsn`` defaults to DATABASE_URL."""
        if self._pool is not None:
            return
        dsn = dsn or config.DATABASE_URL
        if not dsn:
            raise RuntimeError("DATABASE_URL is not set")
        self._pool = await asyncpg.create_pool(
            dsn=dsn,
            min_size=min_size,
            max_size=max_size,
            command_timeout=command_timeout,
        )
        logger.info("Database pool ready (min=%d, max=%d)", min_size, max_size)

    async def close(self) -> None:
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("Database pool closed")

    @property
    def is_initialized(self) -> bool:
        return self._pool is not None

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError(
                "Database pool not initialized. Call await db.initialize() first."
            )
        return self._pool

    async def health_check(self) -> bool:
        """True when a trivial query round-trips."""
        if self._pool is None:
            return False
        try:
            async with self._pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except Exception as e:
            logger.warning("Database health check failed: %s", e)
            return False


db = DatabasePool()
