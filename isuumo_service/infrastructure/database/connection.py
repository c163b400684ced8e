"""
Database connection and utilities
"""
import asyncpg
import logging
from typing import Any, Iterable, List, Optional, Sequence

from ...config import settings

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """PostgreSQL connection pool manager using asyncpg"""

    def __init__(self, dsn: Optional[str] = None, pool_size: Optional[int] = None):
        self.dsn = dsn or settings.DATABASE_URL
        self.pool_size = pool_size or settings.DB_POOL_SIZE
        self.pool: Optional[asyncpg.Pool] = None

    async def connect(self):
        """Create database connection pool"""
        try:
            self.pool = await asyncpg.create_pool(
                self.dsn,
                min_size=1,
                max_size=self.pool_size,
                command_timeout=60,
            )
            logger.info(f"Database pool created with size {self.pool_size}")
        except Exception as e:
            logger.error(f"Failed to connect to database: {e}")
            raise

    async def disconnect(self):
        """Close database connection pool"""
        if self.pool:
            await self.pool.close()
            logger.info("Database pool closed")

    async def fetch_one(self, query: str, *args) -> Optional[asyncpg.Record]:
        """Fetch a single row"""
        async with self.pool.acquire() as conn:
            return await conn.fetchrow(query, *args)

    async def fetch_all(self, query: str, *args) -> List[asyncpg.Record]:
        """Fetch all rows"""
        async with self.pool.acquire() as conn:
            return await conn.fetch(query, *args)

    async def fetch_value(self, query: str, *args) -> Any:
        """Fetch the first column of the first row"""
        async with self.pool.acquire() as conn:
            return await conn.fetchval(query, *args)

    async def execute_many(self, query: str, args_list: Iterable[Sequence[Any]]) -> None:
        """Execute a query for every argument tuple inside one transaction"""
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                await conn.executemany(query, args_list)

    async def execute_script(self, script: str) -> None:
        """Run a multi-statement SQL script"""
        async with self.pool.acquire() as conn:
            await conn.execute(script)


# Global database instance
db_connection = DatabaseConnection()
