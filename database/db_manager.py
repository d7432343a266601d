import asyncpg
import logging
from pathlib import Path
from typing import Optional

from database.exceptions import DatabaseError
from database.repositories import CourseRepositoryDB, LocationRepositoryDB, RoundRepositoryDB

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Bundles the repositories that share one asyncpg pool."""

    def __init__(self, pool: asyncpg.Pool, schema_path: Optional[str] = None):
        self.pool = pool
        self.schema_path = Path(schema_path or Path(__file__).with_name("schema.sql"))
        self.courses = CourseRepositoryDB(pool)
        self.rounds = RoundRepositoryDB(pool)
        self.locations = LocationRepositoryDB(pool)

    async def initialize_schema(self) -> None:
        """Create the tables in `database/schema.sql` if they do not exist."""
        if not self.schema_path.exists():
            raise DatabaseError(f"Schema file not found: {self.schema_path}")

        sql_text = self.schema_path.read_text(encoding="utf-8")
        async with self.pool.acquire() as conn:
            await conn.execute(sql_text)
        logger.info("Schema applied from %s", self.schema_path.name)
