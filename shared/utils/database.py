"""
Database utilities for the project tracker

Each backend service owns one asyncpg pool, opened once at startup and shared
by every request. Consistency relies on single-statement atomicity only.
"""

from typing import Optional

import asyncpg
import structlog
from asyncpg import Pool

logger = structlog.get_logger(__name__)


def build_database_url(
    host: str,
    port: int,
    database: str,
    user: str,
    password: str
) -> str:
    """Build a PostgreSQL connection string from service settings"""
    if not user or not password:
        raise ValueError(
            "DB_SERVICE_USER and DB_SERVICE_PASSWORD must be set for database access. "
            "Each service must use its specific database user."
        )
    return f"postgresql://{user}:{password}@{host}:{port}/{database}"


class BaseDatabase:
    """Connection pool lifecycle shared by the service stores"""

    # DDL executed once after the pool is created
    SCHEMA: str = ""

    def __init__(self, database_url: str, min_size: int = 5, max_size: int = 20, command_timeout: int = 30):
        self.pool: Optional[Pool] = None
        self.database_url = database_url
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout

    async def initialize(self):
        """Initialize database connection pool and make sure tables exist"""
        try:
            self.pool = await asyncpg.create_pool(
                self.database_url,
                min_size=self.min_size,
                max_size=self.max_size,
                command_timeout=self.command_timeout
            )
            logger.info("Database pool created", store=self.__class__.__name__)

            async with self.pool.acquire() as conn:
                await conn.execute('SELECT 1')
                if self.SCHEMA:
                    await conn.execute(self.SCHEMA)
                logger.info("Database connection test successful")

        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))
            raise

    async def close(self):
        """Close database connection pool"""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    def acquire(self):
        """Acquire a pooled connection, for use as ``async with db.acquire() as conn``"""
        if not self.pool:
            raise RuntimeError("Database pool not initialized")
        return self.pool.acquire()

    async def ping(self) -> bool:
        """Run a trivial query, True if the store answers"""
        async with self.acquire() as conn:
            await conn.execute('SELECT 1')
        return True
